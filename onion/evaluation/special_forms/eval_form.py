from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError
from onion.types.context import Context
from onion.types.tail_call import TailCall
from onion.evaluation.evaluator import evaluate


def quote_form(ctx: Context, args: tuple) -> Expression:
    if len(args) != 1:
        raise OnionArityError("quote requires exactly 1 argument")
    return args[0]


def eval_form(ctx: Context, args: tuple) -> Expression:
    # (eval expr): evaluate expr, then evaluate the result in tail position
    if len(args) != 1:
        raise OnionArityError("eval requires exactly 1 argument")
    return TailCall(evaluate(args[0], ctx), ctx)
