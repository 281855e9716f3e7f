from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError
from onion.types.context import Context
from onion.types.nil import Nil
from onion.evaluation.evaluator import evaluate, evaluate_all


def while_form(ctx: Context, args: tuple) -> Expression:
    """
    (while cond body...)
    Re-evaluates cond before every iteration and returns the value of the last
    body form evaluated, or nil when the body never ran.
    """
    if not args:
        raise OnionArityError("while requires a condition")
    cond, body = args[0], args[1:]
    result: Expression = Nil
    while evaluate(cond, ctx) is not Nil:
        result = evaluate_all(body, ctx)
    return result
