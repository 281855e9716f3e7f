from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError
from onion.types.context import Context
from onion.types.nil import Nil
from onion.types.tail_call import TailCall
from onion.evaluation.evaluator import evaluate


def if_form(ctx: Context, args: tuple) -> Expression:
    """(if cond then [else]); the chosen branch is evaluated in tail position."""
    if len(args) not in (2, 3):
        raise OnionArityError("if requires a condition, a then-branch and an optional else-branch")

    cond = evaluate(args[0], ctx)
    if cond is not Nil:
        return TailCall(args[1], ctx)
    if len(args) == 3:
        return TailCall(args[2], ctx)
    return Nil


def default_form(ctx: Context, args: tuple) -> Expression:
    """(? value fallback): value unless it is nil, otherwise fallback."""
    if len(args) != 2:
        raise OnionArityError("? requires exactly 2 arguments")
    value = evaluate(args[0], ctx)
    if value is not Nil:
        return value
    return TailCall(args[1], ctx)
