"""Total order, equality and hashing over every Expression variant.

Any value can be a map key or a scope key, so every variant, including the
ones holding host callables or shared cells, must order and hash. Values of
different variants order by their discriminant. Natives and Refs fall back to
identity. Float NaN sorts above every other float and equals only itself.
"""

from __future__ import annotations

from onion import Expression
from onion.types.expr import (
    ExprList,
    Function,
    NativeFunction,
    OrderedMap,
    Quoted,
    Ref,
    Tagged,
    UnorderedMap,
    Vector,
)
from onion.types.nil import NilType
from onion.types.symbol import Symbol

NIL, INT, FLOAT, STR, SYM, LIST, MAP, HASH_MAP, TAGGED, NATIVE, FUNCTION, QUOTED, REF, VECTOR = range(14)

_RANKS = {
    NilType: NIL,
    int: INT,
    bool: INT,
    float: FLOAT,
    str: STR,
    Symbol: SYM,
    ExprList: LIST,
    OrderedMap: MAP,
    UnorderedMap: HASH_MAP,
    Tagged: TAGGED,
    NativeFunction: NATIVE,
    Function: FUNCTION,
    Quoted: QUOTED,
    Ref: REF,
    Vector: VECTOR,
}


def discriminant(x: Expression) -> int:
    """Rank of the variant of `x`, or -1 for a host value outside the model."""
    return _RANKS.get(type(x), -1)


def _cmp(a, b) -> int:
    if a < b:
        return -1
    if b < a:
        return 1
    return 0


def _compare_seq(xs, ys) -> int:
    for x, y in zip(xs, ys):
        c = compare(x, y)
        if c:
            return c
    return _cmp(len(xs), len(ys))


def _sorted_items(m) -> list:
    if isinstance(m, OrderedMap):
        return m.items()
    items = m.items()
    items.sort(key=lambda kv: _KeyCmp(kv[0]))
    return items


class _KeyCmp:
    __slots__ = ("value",)

    def __init__(self, value):
        self.value = value

    def __lt__(self, other):
        return compare(self.value, other.value) < 0


def compare(a: Expression, b: Expression) -> int:
    """Three-way comparison: negative, zero or positive."""
    if a is b:
        return 0
    ra, rb = discriminant(a), discriminant(b)
    if ra != rb:
        return _cmp(ra, rb)
    if ra == NIL:
        return 0
    if ra == FLOAT:
        # NaN sorts above every other float and equals only NaN
        a_nan, b_nan = a != a, b != b
        if a_nan or b_nan:
            return _cmp(a_nan, b_nan)
        return _cmp(a, b)
    if ra in (INT, STR):
        return _cmp(a, b)
    if ra == SYM:
        return _cmp(a.id, b.id)
    if ra in (LIST, VECTOR):
        return _compare_seq(a.items, b.items)
    if ra in (MAP, HASH_MAP):
        xs, ys = _sorted_items(a), _sorted_items(b)
        for (ka, va), (kb, vb) in zip(xs, ys):
            c = compare(ka, kb) or compare(va, vb)
            if c:
                return c
        return _cmp(len(xs), len(ys))
    if ra == TAGGED:
        return compare(a.tag, b.tag) or compare(a.value, b.value)
    if ra == QUOTED:
        return compare(a.expr, b.expr)
    if ra == FUNCTION:
        return _compare_seq(a.params, b.params) or compare(a.body, b.body)
    # Natives, Refs and foreign host values
    return _cmp(id(a), id(b))


def equal(a: Expression, b: Expression) -> bool:
    if a is b:
        return True
    ra = discriminant(a)
    if ra == -1 or ra != discriminant(b):
        return False
    if ra in (NATIVE, REF):
        return False
    if ra in (LIST, VECTOR):
        if len(a.items) != len(b.items):
            return False
    elif ra in (MAP, HASH_MAP):
        if len(a) != len(b):
            return False
    return compare(a, b) == 0


def hash_key(x: Expression):
    """Dictionary key standing in for `x`.

    Python would fold 1, 1.0 and True into one dict slot; tagging the
    numeric variants keeps Int and Float keys apart.
    """
    t = type(x)
    if t is int or t is bool:
        return (INT, int(x))
    if t is float:
        if x != x:
            return (FLOAT, "nan")
        return (FLOAT, x)
    return x


def _h(x: Expression) -> int:
    return hash(hash_key(x))


def expr_hash(x: Expression) -> int:
    r = discriminant(x)
    if r in (LIST, VECTOR):
        return hash((r, tuple(_h(i) for i in x.items)))
    if r in (MAP, HASH_MAP):
        return hash((r, frozenset((_h(k), _h(v)) for k, v in x.items())))
    if r == TAGGED:
        return hash((r, x.tag, _h(x.value)))
    if r == QUOTED:
        return hash((r, _h(x.expr)))
    if r == FUNCTION:
        return hash((r, x.params, _h(x.body)))
    return _h(x)
