from onion.types.nil import Nil, NilType
from onion.types.symbol import Symbol, intern
from onion.types.expr import (
    ExprList,
    Function,
    NativeFunction,
    OrderedMap,
    Quoted,
    Ref,
    Tagged,
    UnorderedMap,
    Vector,
)

__all__ = [
    "Nil",
    "NilType",
    "Symbol",
    "intern",
    "ExprList",
    "Function",
    "NativeFunction",
    "OrderedMap",
    "Quoted",
    "Ref",
    "Tagged",
    "UnorderedMap",
    "Vector",
]
