from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError
from onion.types.context import Context
from onion.types.nil import Nil
from onion.types.tail_call import TailCall
from onion.evaluation.evaluator import evaluate


def and_form(ctx: Context, args: tuple) -> Expression:
    """Short-circuiting logical AND.

    (and a b c ...) evaluates operands left to right and returns nil at the
    first nil. Otherwise the last operand is evaluated in tail position and
    its value returned. With zero operands, returns 1.
    """
    if not args:
        return 1
    for expr in args[:-1]:
        if evaluate(expr, ctx) is Nil:
            return Nil
    return TailCall(args[-1], ctx)


def or_form(ctx: Context, args: tuple) -> Expression:
    """Short-circuiting logical OR.

    (or a b c ...) returns the first non-nil operand; the last operand is
    evaluated in tail position. With zero operands, returns nil.
    """
    if not args:
        return Nil
    for expr in args[:-1]:
        val = evaluate(expr, ctx)
        if val is not Nil:
            return val
    return TailCall(args[-1], ctx)


def not_form(ctx: Context, args: tuple) -> Expression:
    if len(args) != 1:
        raise OnionArityError("not requires exactly 1 argument")
    return 1 if evaluate(args[0], ctx) is Nil else Nil
