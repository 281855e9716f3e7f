from __future__ import annotations

from onion import Expression
from onion.types.context import Context
from onion.types.nil import Nil
from onion.types.tail_call import TailCall
from onion.evaluation.evaluator import evaluate


def do_form(ctx: Context, args: tuple) -> Expression:
    if not args:
        return Nil
    for e in args[:-1]:
        evaluate(e, ctx)
    return TailCall(args[-1], ctx)
