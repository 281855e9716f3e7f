"""Chained variable frames.

A Scope is one frame plus a link to its parent. Frames are shared: a closure
keeps its defining frame alive and every call frame links to the callee's
captured frame, so chains can be very long (one link per pending call of a
deep recursion). Releasing such a chain must not recurse once per link.
"""

from __future__ import annotations

import sys
import threading
from typing import Iterator, Optional

from onion import Expression
from onion.types.ordering import hash_key


class Scope:
    __slots__ = ("vars", "parent", "_lock")

    def __init__(self, parent: Optional[Scope] = None):
        # hash_key(key) -> (key, value)
        self.vars: dict = {}
        self.parent = parent
        self._lock = threading.Lock()

    def define(self, key: Expression, value: Expression) -> None:
        """Bind `key` in this frame only, replacing any earlier binding."""
        with self._lock:
            self.vars[hash_key(key)] = (key, value)

    def lookup(self, key: Expression) -> tuple[bool, Expression]:
        """Walk outward from this frame; return (found, value)."""
        hk = hash_key(key)
        scope: Optional[Scope] = self
        while scope is not None:
            with scope._lock:
                entry = scope.vars.get(hk)
            if entry is not None:
                return True, entry[1]
            scope = scope.parent
        return False, None

    def resolve(self, key: Expression) -> Optional[Expression]:
        return self.lookup(key)[1]

    def find(self, key: Expression) -> Optional[Scope]:
        """Return the nearest frame in the chain that binds `key`."""
        hk = hash_key(key)
        scope: Optional[Scope] = self
        while scope is not None:
            with scope._lock:
                if hk in scope.vars:
                    return scope
            scope = scope.parent
        return None

    def items(self) -> list[tuple[Expression, Expression]]:
        """Snapshot of this frame's own bindings."""
        with self._lock:
            return list(self.vars.values())

    def depth(self) -> int:
        n = 0
        scope = self.parent
        while scope is not None:
            n += 1
            scope = scope.parent
        return n

    def chain(self) -> Iterator[Scope]:
        scope: Optional[Scope] = self
        while scope is not None:
            yield scope
            scope = scope.parent

    def root(self) -> Scope:
        """The outermost frame of the chain."""
        *_, last = self.chain()
        return last

    def __del__(self):
        # Unlink parents we hold the only reference to, one at a time, so the
        # default teardown never cascades into a deep recursion. A refcount of
        # 2 is our local plus the getrefcount argument.
        parent = self.parent
        self.parent = None
        while parent is not None and sys.getrefcount(parent) <= 2:
            nxt = parent.parent
            parent.parent = None
            parent = nxt

    def __repr__(self) -> str:
        with self._lock:
            keys = [str(k) for k, _ in self.vars.values()]
        suffix = " -> ..." if self.parent is not None else ""
        return f"<Scope {{{', '.join(keys)}}}{suffix}>"
