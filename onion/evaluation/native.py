"""Helpers for exposing host functions as natives.

Every native receives its arguments unevaluated. Most host functions only
want values, so `native(fn)` adapts a `fn(ctx, values)` that works on
already-evaluated arguments; pass `strict=False` for functions that control
evaluation themselves (control flow, definitions, assignment).
"""

from __future__ import annotations

import functools
from typing import Callable, Optional

from onion import Expression
from onion.evaluation.evaluator import evaluate
from onion.types.context import Context
from onion.types.expr import NativeFunction

I64_MASK = (1 << 64) - 1
I64_SIGN = 1 << 63


def wrap_i64(n: int) -> int:
    """Two's-complement wrap into the signed 64-bit range."""
    n &= I64_MASK
    return n - (1 << 64) if n & I64_SIGN else n


def is_number(x: Expression) -> bool:
    t = type(x)
    return t is int or t is float


def evaluated(fn: Callable[[Context, list], Expression]) -> Callable[[Context, tuple], Expression]:
    """Evaluate every argument left to right, then call `fn(ctx, values)`."""

    @functools.wraps(fn)
    def wrapper(ctx: Context, args: tuple) -> Expression:
        return fn(ctx, [evaluate(arg, ctx) for arg in args])

    return wrapper


def native(
    fn: Callable,
    name: Optional[str] = None,
    doc: Optional[str] = None,
    strict: bool = True,
) -> NativeFunction:
    short = name or fn.__name__.rstrip("_")
    long = doc if doc is not None else (fn.__doc__ or "").strip()
    return NativeFunction(evaluated(fn) if strict else fn, short, long)
