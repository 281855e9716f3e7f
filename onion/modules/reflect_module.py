from __future__ import annotations

from onion import Expression
from onion.debug_utils.pprint import to_display
from onion.evaluation.native import native, wrap_i64
from onion.types.context import Context
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
from onion.types.nil import Nil, NilType
from onion.types.symbol import Symbol

MODULE_NAME = "Type"

TYPE_NAMES = (
    (NilType, "nil"),
    (bool, "int"),
    (int, "int"),
    (float, "float"),
    (str, "string"),
    (Symbol, "symbol"),
    (ExprList, "list"),
    (Vector, "vector"),
    (OrderedMap, "map"),
    (UnorderedMap, "map"),
    (Function, "fn"),
    (NativeFunction, "fn"),
    (Ref, "ref"),
    (Tagged, "tagged"),
    (Quoted, "quoted"),
)


def type_name(x: Expression) -> str:
    for cls, name in TYPE_NAMES:
        if type(x) is cls:
            return name
    return "unknown"


def _single(args: list):
    return args[0] if len(args) == 1 else None


def of(ctx: Context, args: list) -> Expression:
    """Type name of the value as a string."""
    if len(args) != 1:
        return Nil
    return type_name(args[0])


def _is(*names: str):
    def check(ctx: Context, args: list) -> Expression:
        return 1 if len(args) == 1 and type_name(args[0]) in names else Nil
    return check


def to_int(ctx: Context, args: list) -> Expression:
    """Convert a number or numeric string to an int; floats truncate."""
    x = _single(args)
    if type(x) is int:
        return x
    if type(x) is float:
        if x != x or x in (float("inf"), float("-inf")):
            return Nil
        return wrap_i64(int(x))
    if isinstance(x, str):
        try:
            return wrap_i64(int(x.strip()))
        except ValueError:
            return Nil
    return Nil


def to_float(ctx: Context, args: list) -> Expression:
    """Convert a number or numeric string to a float."""
    x = _single(args)
    if type(x) in (int, float):
        return float(x)
    if isinstance(x, str):
        try:
            return float(x.strip())
        except ValueError:
            return Nil
    return Nil


def to_str(ctx: Context, args: list) -> Expression:
    """Display form of any value."""
    if len(args) != 1:
        return Nil
    return to_display(args[0])


def to_sym(ctx: Context, args: list) -> Expression:
    x = _single(args)
    if isinstance(x, str):
        return Symbol(x)
    if isinstance(x, Symbol):
        return x
    return Nil


def exports() -> dict[str, Expression]:
    return {
        "of": native(of),
        "is_int": native(_is("int"), "is_int", "Is integer?"),
        "is_float": native(_is("float"), "is_float", "Is float?"),
        "is_string": native(_is("string"), "is_string", "Is string?"),
        "is_list": native(_is("list"), "is_list", "Is list?"),
        "is_vector": native(_is("vector"), "is_vector", "Is vector?"),
        "is_map": native(_is("map"), "is_map", "Is map?"),
        "is_nil": native(_is("nil"), "is_nil", "Is nil?"),
        "to_int": native(to_int),
        "to_float": native(to_float),
        "to_str": native(to_str),
        "to_sym": native(to_sym, "to_sym", "Convert a string to a symbol"),
    }
