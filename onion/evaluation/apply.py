"""Application engine for Onion.

Centralizes how a user Function gets its call frame so the evaluator loop,
`apply_value` and the library modules bind arguments the same way:

- static scoping: the call frame links to the function's *captured* scope,
  never to the caller's;
- a named function re-binds its own name in every call frame, which is what
  makes recursion work without a definition-time reference cycle;
- arity mismatches are fatal.
"""

from __future__ import annotations

from typing import Callable, Iterable, Sequence

from onion import Expression
from onion.errors import OnionArityError, OnionTypeError
from onion.types.context import Context
from onion.types.expr import Function, NativeFunction, Quoted
from onion.types.scope import Scope
from onion.types.tail_call import TailCall


def _check_arity(fn: Function, count: int) -> None:
    if len(fn.params) != count:
        name = fn.name if fn.name is not None else "<anonymous>"
        raise OnionArityError(
            f"Function {name} expected {len(fn.params)} arguments, got {count}"
        )


def new_call_context(fn: Function, values: Iterable[Expression] = ()) -> Context:
    call_ctx = fn.env.with_scope(Scope(fn.env.scope))
    if fn.name is not None:
        call_ctx.define(fn.name, fn)
    for param, value in zip(fn.params, values):
        call_ctx.define(param, value)
    return call_ctx


def bind_arguments(
    fn: Function,
    args: Sequence[Expression],
    caller: Context,
    evaluate_fn: Callable[[Expression, Context], Expression],
) -> Context:
    """Return the call context for `fn` with `args` evaluated in `caller`."""
    _check_arity(fn, len(args))
    call_ctx = new_call_context(fn)
    for param, arg in zip(fn.params, args):
        call_ctx.define(param, evaluate_fn(arg, caller))
    return call_ctx


def apply_value(fn: Expression, values: Sequence[Expression], ctx: Context) -> Expression:
    """Call `fn` with already-evaluated `values`.

    Natives expect unevaluated arguments, so each value is quoted once and
    the native's own evaluation strips the quote back off.
    """
    from onion.evaluation.evaluator import evaluate

    if isinstance(fn, Function):
        _check_arity(fn, len(values))
        return evaluate(fn.body, new_call_context(fn, values))
    if isinstance(fn, NativeFunction):
        result = fn(ctx, tuple(Quoted(v) for v in values))
        if isinstance(result, TailCall):
            return evaluate(result.expr, result.ctx)
        return result
    raise OnionTypeError(f"Cannot call {fn!s}: not a function")


def is_callable(value: Expression) -> bool:
    return isinstance(value, (Function, NativeFunction))
