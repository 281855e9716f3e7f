"""Evaluation context: an operator-table handle plus a scope-chain handle.

Cloning a Context aliases both handles; `child()` aliases the operator table
and pushes a fresh frame on top of the current scope.
"""

from __future__ import annotations

from typing import Optional

from onion import Expression
from onion.logging_config import get_logger
from onion.types.operators import OperatorTable, OpInfo
from onion.types.scope import Scope
from onion.types.symbol import Symbol

logger = get_logger(__name__)


class Context:
    __slots__ = ("operators", "scope")

    def __init__(
        self,
        operators: Optional[OperatorTable] = None,
        scope: Optional[Scope] = None,
    ):
        self.operators = operators if operators is not None else OperatorTable()
        self.scope = scope if scope is not None else Scope()

    def define(self, key: Expression, value: Expression) -> None:
        self.scope.define(key, value)

    def update(self, mapping: dict) -> None:
        """Bulk-define a mapping of key -> value in the current frame."""
        for key, value in mapping.items():
            self.scope.define(key, value)

    def lookup(self, key: Expression) -> tuple[bool, Expression]:
        return self.scope.lookup(key)

    def resolve(self, key: Expression) -> Optional[Expression]:
        return self.scope.resolve(key)

    def define_op(self, name: str, info: OpInfo, value: Expression) -> None:
        """Register `name` as an operator and bind its callable in the root frame.

        The operator table is shared by every frame, so the binding must
        outlive the frame that defined it.
        """
        logger.debug(
            "Defining operator %r (precedence=%d, %s, unary=%s)",
            name,
            info.precedence,
            info.associativity.value,
            info.unary,
        )
        self.operators.define(name, info)
        self.scope.root().define(Symbol(name), value)

    def get_op(self, name: str) -> Optional[OpInfo]:
        return self.operators.lookup(name)

    def child(self) -> Context:
        return Context(self.operators, Scope(self.scope))

    def with_scope(self, scope: Scope) -> Context:
        return Context(self.operators, scope)

    def clone(self) -> Context:
        return Context(self.operators, self.scope)

    def __repr__(self) -> str:
        return f"<Context ops={len(self.operators)} scope={self.scope!r}>"
