"""Process-wide symbol table.

Symbols are interned: `Symbol("x") is Symbol("x")`. Equality is identity of the
interned object (the default object equality and hash), so comparing symbols
never touches their text. The table is a documented process-wide singleton
that only ever grows.
"""

from __future__ import annotations

import sys
import threading


class Symbol:
    __slots__ = ("id",)

    def __new__(cls, name: str) -> Symbol:
        return intern(name)

    def __lt__(self, other: Symbol) -> bool:
        return self.id < other.id

    def __reduce__(self):
        return (intern, (self.id,))

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


_table: dict[str, Symbol] = {}
_lock = threading.Lock()


def intern(text: str) -> Symbol:
    """Return the unique Symbol for `text`, creating it on first use."""
    # Fast path: no lock for symbols that already exist
    existing = _table.get(text)
    if existing is not None:
        return existing
    with _lock:
        # Another thread may have inserted while we waited for the lock
        existing = _table.get(text)
        if existing is not None:
            return existing
        sym = object.__new__(Symbol)
        sym.id = sys.intern(text)
        _table[text] = sym
        return sym


def table_size() -> int:
    return len(_table)
