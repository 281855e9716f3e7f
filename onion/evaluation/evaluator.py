"""Core evaluator and trampoline for the Onion interpreter.

`evaluate` loops over a working (expression, context) pair. Calling a user
Function replaces the pair with (body, call context) and loops again, and a
native in tail position hands back a TailCall that does the same, so
tail-recursive programs run in constant host stack. Only argument
evaluation, list heads and collection literals recurse.
"""

from __future__ import annotations

from onion import Expression
from onion.evaluation.apply import bind_arguments
from onion.types.context import Context
from onion.types.expr import ExprList, Function, NativeFunction, OrderedMap, Quoted, UnorderedMap, Vector
from onion.types.nil import Nil
from onion.types.tail_call import TailCall


def is_truthy(value: Expression) -> bool:
    """Nil is the only false value; 0, "" and () are all true."""
    return value is not Nil


def evaluate(expr: Expression, ctx: Context) -> Expression:
    while True:
        # Any expression bound in scope, not only a Symbol, is replaced by
        # its binding.
        found, value = ctx.lookup(expr)
        if found:
            return value

        kind = type(expr)
        if kind is ExprList:
            items = expr.items
            if not items:
                return expr
            head = evaluate(items[0], ctx)
            args = items[1:]
            if type(head) is NativeFunction:
                result = head(ctx, args)
                if type(result) is TailCall:
                    expr, ctx = result.expr, result.ctx
                    continue
                return result
            if type(head) is Function:
                ctx = bind_arguments(head, args, ctx, evaluate)
                expr = head.body
                continue
            # Not callable: `((. obj key))` reads a property this way
            return head

        if kind is Vector:
            return Vector([evaluate(item, ctx) for item in expr.items])

        if kind is OrderedMap or kind is UnorderedMap:
            return kind([(evaluate(k, ctx), evaluate(v, ctx)) for k, v in expr.items()])

        if kind is Quoted:
            return expr.expr

        return expr


def evaluate_all(exprs, ctx: Context) -> Expression:
    """Evaluate a body in order and return the last value, Nil when empty."""
    result: Expression = Nil
    for e in exprs:
        result = evaluate(e, ctx)
    return result
