"""Live operator registry consulted by the parser.

The table starts empty. The stdlib bootstrap fills it, and programs can keep
adding operators while a source stream is being parsed; every Context cloned
from the same root shares one table, so a definition is visible immediately.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Assoc(Enum):
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class OpInfo:
    precedence: int
    associativity: Assoc = Assoc.LEFT
    unary: bool = False

    def right_binding_power(self) -> int:
        """Minimum binding power for the right operand of an infix use."""
        if self.associativity is Assoc.LEFT:
            return self.precedence + 1
        return self.precedence


class OperatorTable:
    __slots__ = ("_ops", "_lock", "_by_length")

    def __init__(self):
        self._ops: dict[str, OpInfo] = {}
        self._lock = threading.Lock()
        self._by_length: Optional[tuple[str, ...]] = None

    def define(self, name: str, info: OpInfo) -> None:
        with self._lock:
            self._ops[name] = info
            self._by_length = None

    def lookup(self, name: str) -> Optional[OpInfo]:
        with self._lock:
            return self._ops.get(name)

    def all_names(self) -> list[str]:
        with self._lock:
            return list(self._ops)

    def longest_first(self) -> tuple[str, ...]:
        """Operator names ordered by descending length (`==` before `=`)."""
        with self._lock:
            if self._by_length is None:
                self._by_length = tuple(sorted(self._ops, key=len, reverse=True))
            return self._by_length

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._ops)
