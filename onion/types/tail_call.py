from __future__ import annotations

from typing import TYPE_CHECKING

from onion import Expression

if TYPE_CHECKING:
    from onion.types.context import Context


class TailCall:
    """Returned by a native to ask the evaluator loop to continue with
    `expr` in `ctx` instead of recursing."""

    __slots__ = ("expr", "ctx")

    def __init__(self, expr: Expression, ctx: Context):
        self.expr = expr
        self.ctx = ctx
