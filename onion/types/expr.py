"""Composite expression variants.

Scalars are plain Python values (Nil, int, float, str, Symbol). Everything
else an Onion program can build lives here. All of them take part in the
total order / hash contract implemented in onion.types.ordering, which is what
lets any expression be used as a map key or as a scope key.

Sequences and maps are immutable values: "updating" a map returns a new map.
The only mutable cell in the language is Ref.
"""

from __future__ import annotations

import threading
from functools import cmp_to_key
from typing import Callable, Iterable, Iterator, Optional, TYPE_CHECKING

from onion import Expression
from onion.types.symbol import Symbol

if TYPE_CHECKING:
    from onion.types.context import Context


class _Sequence:
    __slots__ = ("items", "_hash")

    def __init__(self, items: Iterable[Expression] = ()):
        self.items: tuple[Expression, ...] = tuple(items)
        self._hash: Optional[int] = None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Expression]:
        return iter(self.items)

    def __getitem__(self, index):
        if isinstance(index, slice):
            return type(self)(self.items[index])
        return self.items[index]

    def __eq__(self, other: object) -> bool:
        return ordering.equal(self, other)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = ordering.expr_hash(self)
        return self._hash

    def __lt__(self, other: Expression) -> bool:
        return ordering.compare(self, other) < 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({list(self.items)!r})"

    def __str__(self) -> str:
        from onion.debug_utils.pprint import to_display
        return to_display(self)


class ExprList(_Sequence):
    """Ordered sequence; both the call form `(f a b)` and a runtime list."""
    __slots__ = ()


class Vector(_Sequence):
    """Ordered sequence with its own tag, distinct from ExprList."""
    __slots__ = ()


class _ExprMap:
    """Shared storage for both map flavours.

    Entries are keyed by `hash_key(key)` so that Int 1 and Float 1.0 stay
    distinct keys, and each entry keeps the original key for iteration.
    """

    __slots__ = ("_entries", "_hash")

    def __init__(self, pairs: Iterable[tuple[Expression, Expression]] = ()):
        entries: dict = {}
        for key, value in pairs:
            entries[ordering.hash_key(key)] = (key, value)
        self._entries = entries
        self._hash: Optional[int] = None

    @classmethod
    def from_flat(cls, flat: Iterable[Expression]):
        """Build from `k1 v1 k2 v2 ...`; an odd trailing element is dropped."""
        items = list(flat)
        return cls((items[i], items[i + 1]) for i in range(0, len(items) - 1, 2))

    def _with_entries(self, entries: dict):
        new = object.__new__(type(self))
        new._entries = entries
        new._hash = None
        return new

    def get(self, key: Expression, default: Expression = None) -> Expression:
        entry = self._entries.get(ordering.hash_key(key))
        return default if entry is None else entry[1]

    def __contains__(self, key: Expression) -> bool:
        return ordering.hash_key(key) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Expression]:
        return (k for k, _ in self.items())

    def items(self) -> list[tuple[Expression, Expression]]:
        return list(self._entries.values())

    def keys(self) -> list[Expression]:
        return [k for k, _ in self.items()]

    def values(self) -> list[Expression]:
        return [v for _, v in self.items()]

    def assoc(self, key: Expression, value: Expression):
        """Return a copy with `key` bound to `value` (overwriting, never duplicating)."""
        entries = dict(self._entries)
        entries[ordering.hash_key(key)] = (key, value)
        return self._with_entries(entries)

    def dissoc(self, key: Expression):
        entries = dict(self._entries)
        entries.pop(ordering.hash_key(key), None)
        return self._with_entries(entries)

    def merge(self, other: _ExprMap):
        entries = dict(self._entries)
        entries.update(other._entries)
        return self._with_entries(entries)

    def __eq__(self, other: object) -> bool:
        return ordering.equal(self, other)

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = ordering.expr_hash(self)
        return self._hash

    def __lt__(self, other: Expression) -> bool:
        return ordering.compare(self, other) < 0

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"{type(self).__name__}({{{inner}}})"

    def __str__(self) -> str:
        from onion.debug_utils.pprint import to_display
        return to_display(self)


class OrderedMap(_ExprMap):
    """Map whose iteration order is ascending key order under `compare`."""

    __slots__ = ("_sorted",)

    def __init__(self, pairs: Iterable[tuple[Expression, Expression]] = ()):
        super().__init__(pairs)
        self._sorted: Optional[list] = None

    def _with_entries(self, entries: dict):
        new = super()._with_entries(entries)
        new._sorted = None
        return new

    def items(self) -> list[tuple[Expression, Expression]]:
        if self._sorted is None:
            by_key = cmp_to_key(ordering.compare)
            self._sorted = sorted(self._entries.values(), key=lambda kv: by_key(kv[0]))
        return list(self._sorted)


class UnorderedMap(_ExprMap):
    """Map with unspecified iteration order (insertion order in practice)."""
    __slots__ = ()


class Tagged:
    __slots__ = ("tag", "value")

    def __init__(self, tag: Symbol, value: Expression):
        self.tag = tag
        self.value = value

    def __eq__(self, other: object) -> bool:
        return ordering.equal(self, other)

    def __hash__(self) -> int:
        return ordering.expr_hash(self)

    def __lt__(self, other: Expression) -> bool:
        return ordering.compare(self, other) < 0

    def __repr__(self) -> str:
        return f"Tagged({self.tag!r}, {self.value!r})"

    def __str__(self) -> str:
        from onion.debug_utils.pprint import to_display
        return to_display(self)


class Quoted:
    """Defers evaluation by exactly one level: evaluating 'e yields e."""

    __slots__ = ("expr",)

    def __init__(self, expr: Expression):
        self.expr = expr

    def __eq__(self, other: object) -> bool:
        return ordering.equal(self, other)

    def __hash__(self) -> int:
        return ordering.expr_hash(self)

    def __lt__(self, other: Expression) -> bool:
        return ordering.compare(self, other) < 0

    def __repr__(self) -> str:
        return f"Quoted({self.expr!r})"

    def __str__(self) -> str:
        from onion.debug_utils.pprint import to_display
        return to_display(self)


class NativeFunction:
    """A host function exposed to the language.

    `fn(ctx, args)` receives the evaluation Context and the *unevaluated*
    argument tuple; it decides itself what to evaluate and when. Natives are
    compared, ordered and hashed by identity.
    """

    __slots__ = ("fn", "short_desc", "long_desc")

    def __init__(
        self,
        fn: Callable[[Context, tuple], Expression],
        short_desc: str = "",
        long_desc: str = "",
    ):
        self.fn = fn
        self.short_desc = short_desc or getattr(fn, "__name__", "native")
        self.long_desc = long_desc or (fn.__doc__ or "").strip()

    def __call__(self, ctx: Context, args: tuple) -> Expression:
        return self.fn(ctx, args)

    def __lt__(self, other: Expression) -> bool:
        return ordering.compare(self, other) < 0

    def __repr__(self) -> str:
        return f"<extern: {self.short_desc}>"

    __str__ = __repr__


class Function:
    """A user-defined closure.

    The parameter list and body are owned; `env` is the captured defining
    Context, shared rather than copied. A named function re-binds its own
    name in each call frame, so no reference cycle is built at definition.
    """

    __slots__ = ("params", "body", "env", "name")

    def __init__(
        self,
        params: Iterable[Symbol],
        body: Expression,
        env: Context,
        name: Optional[Symbol] = None,
    ):
        self.params: tuple[Symbol, ...] = tuple(params)
        self.body = body
        self.env = env
        self.name = name

    def with_env(self, env: Context) -> Function:
        return Function(self.params, self.body, env, self.name)

    def __eq__(self, other: object) -> bool:
        return ordering.equal(self, other)

    def __hash__(self) -> int:
        return ordering.expr_hash(self)

    def __lt__(self, other: Expression) -> bool:
        return ordering.compare(self, other) < 0

    def __repr__(self) -> str:
        from onion.debug_utils.pprint import to_display
        return to_display(self)

    __str__ = __repr__


class Ref:
    """Shared, mutable single-slot cell compared by identity.

    Every holder of the same Ref observes the same value. The lock is not
    re-entrant; `update` must not call back into the evaluator.
    """

    __slots__ = ("_value", "_lock", "__weakref__")

    def __init__(self, value: Expression):
        self._value = value
        self._lock = threading.Lock()

    def get(self) -> Expression:
        with self._lock:
            return self._value

    def set(self, value: Expression) -> None:
        with self._lock:
            self._value = value

    def update(self, fn: Callable[[Expression], Expression]) -> Expression:
        with self._lock:
            self._value = fn(self._value)
            return self._value

    def __lt__(self, other: Expression) -> bool:
        return ordering.compare(self, other) < 0

    def __repr__(self) -> str:
        return f"Ref({self._value!r})"

    def __str__(self) -> str:
        from onion.debug_utils.pprint import to_display
        return to_display(self)


# Imported last: ordering needs the classes above, and they only reach into
# it at call time.
from onion.types import ordering  # noqa: E402
