from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError, OnionTypeError
from onion.types.context import Context
from onion.types.expr import ExprList, Quoted
from onion.types.symbol import Symbol
from onion.evaluation.evaluator import evaluate

DOT = Symbol(".")


def assign_form(ctx: Context, args: tuple) -> Expression:
    """
    (= name value)       bind name in the innermost frame
    (= (. obj key) value) set a property; `obj.key = value` parses to this

    A bare symbol key on the left names the property literally, the same way
    it does when the property is read.
    """
    if len(args) != 2:
        raise OnionArityError("= requires exactly 2 arguments")
    lhs, rhs = args

    if isinstance(lhs, ExprList) and len(lhs) >= 1 and lhs[0] is DOT:
        if len(lhs) != 3:
            raise OnionTypeError(f"Cannot assign to {lhs!s}")
        value = evaluate(rhs, ctx)
        key = lhs[2]
        if isinstance(key, Symbol):
            key = Quoted(key)
        return evaluate(ExprList((DOT, lhs[1], key, Quoted(value))), ctx)

    if isinstance(lhs, Symbol):
        value = evaluate(rhs, ctx)
        ctx.define(lhs, value)
        return value

    raise OnionTypeError(f"Cannot assign to {lhs!s}")
