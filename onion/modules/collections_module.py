"""Collections: list helpers, higher-order functions and map utilities.

Callbacks go through `apply_value`, so user Functions and natives are both
accepted. Bad input yields nil, except `map` and `filter` which yield an
empty list and `fold` which yields its initial value.
"""
from __future__ import annotations

from functools import cmp_to_key

from onion import Expression
from onion.evaluation.apply import apply_value, is_callable
from onion.evaluation.evaluator import is_truthy
from onion.evaluation.native import native
from onion.types import ordering
from onion.types.context import Context
from onion.types.expr import ExprList, OrderedMap, UnorderedMap, Vector
from onion.types.nil import Nil

MODULE_NAME = "Collections"

SEQUENCES = (ExprList, Vector)
MAPS = (OrderedMap, UnorderedMap)


def _seq(args: list, count: int):
    if len(args) != count or not isinstance(args[0], SEQUENCES):
        return None
    return args[0]


def _seq_and_fn(args: list):
    if len(args) != 2 or not isinstance(args[0], SEQUENCES) or not is_callable(args[1]):
        return None
    return args[0], args[1]


def push(ctx: Context, args: list) -> Expression:
    """(push list value): new list with value appended."""
    seq = _seq(args, 2)
    if seq is None:
        return Nil
    return type(seq)((*seq.items, args[1]))


def pop(ctx: Context, args: list) -> Expression:
    """(pop list): everything but the last element."""
    seq = _seq(args, 1)
    if seq is None:
        return Nil
    return seq[:-1]


def peek(ctx: Context, args: list) -> Expression:
    """(peek list): the last element."""
    seq = _seq(args, 1)
    if seq is None or not seq.items:
        return Nil
    return seq.items[-1]


def reverse(ctx: Context, args: list) -> Expression:
    seq = _seq(args, 1)
    if seq is None:
        return Nil
    return seq[::-1]


def sort(ctx: Context, args: list) -> Expression:
    """Sort by the total value order, so mixed types are fine."""
    seq = _seq(args, 1)
    if seq is None:
        return Nil
    return type(seq)(sorted(seq.items, key=cmp_to_key(ordering.compare)))


def range_(ctx: Context, args: list) -> Expression:
    """(range start end [step]): integers from start up to, not including, end."""
    if len(args) not in (2, 3) or not all(type(a) is int for a in args):
        return Nil
    step = args[2] if len(args) == 3 else 1
    if step == 0:
        return Nil
    return ExprList(range(args[0], args[1], step))


def zip_(ctx: Context, args: list) -> Expression:
    """(zip a b): list of two-element lists, as long as the shorter input."""
    if len(args) != 2 or not all(isinstance(a, SEQUENCES) for a in args):
        return Nil
    return ExprList(ExprList(pair) for pair in zip(args[0], args[1]))


def _flatten_into(out: list, seq) -> None:
    for item in seq:
        if isinstance(item, SEQUENCES):
            _flatten_into(out, item)
        else:
            out.append(item)


def flatten(ctx: Context, args: list) -> Expression:
    seq = _seq(args, 1)
    if seq is None:
        return Nil
    out: list[Expression] = []
    _flatten_into(out, seq)
    return ExprList(out)


def dedup(ctx: Context, args: list) -> Expression:
    """Drop repeated elements, keeping the first occurrence."""
    seq = _seq(args, 1)
    if seq is None:
        return Nil
    seen = set()
    out = []
    for item in seq:
        key = ordering.hash_key(item)
        if key not in seen:
            seen.add(key)
            out.append(item)
    return type(seq)(out)


def enumerate_(ctx: Context, args: list) -> Expression:
    """(enumerate list): list of (index item) pairs."""
    seq = _seq(args, 1)
    if seq is None:
        return Nil
    return ExprList(ExprList((i, item)) for i, item in enumerate(seq))


def get(ctx: Context, args: list) -> Expression:
    """(get coll key): list or string index (negative counts from the end), or map lookup."""
    if len(args) != 2:
        return Nil
    coll, key = args
    if isinstance(coll, MAPS):
        return coll.get(key, Nil)
    if isinstance(coll, (str, ExprList, Vector)) and type(key) is int:
        if -len(coll) <= key < len(coll):
            return coll[key] if isinstance(coll, str) else coll.items[key]
    return Nil


# -------------------------------
# Higher order
# -------------------------------
def map_(ctx: Context, args: list) -> Expression:
    """(map list fn)"""
    parsed = _seq_and_fn(args)
    if parsed is None:
        return ExprList()
    seq, fn = parsed
    return ExprList(apply_value(fn, (item,), ctx) for item in seq)


def filter_(ctx: Context, args: list) -> Expression:
    """(filter list fn): the elements for which fn is truthy."""
    parsed = _seq_and_fn(args)
    if parsed is None:
        return ExprList()
    seq, fn = parsed
    return ExprList(item for item in seq if is_truthy(apply_value(fn, (item,), ctx)))


def find(ctx: Context, args: list) -> Expression:
    """(find list fn): the first element for which fn is truthy."""
    parsed = _seq_and_fn(args)
    if parsed is None:
        return Nil
    seq, fn = parsed
    for item in seq:
        if is_truthy(apply_value(fn, (item,), ctx)):
            return item
    return Nil


def any_(ctx: Context, args: list) -> Expression:
    parsed = _seq_and_fn(args)
    if parsed is None:
        return Nil
    seq, fn = parsed
    return 1 if any(is_truthy(apply_value(fn, (item,), ctx)) for item in seq) else Nil


def all_(ctx: Context, args: list) -> Expression:
    parsed = _seq_and_fn(args)
    if parsed is None:
        return Nil
    seq, fn = parsed
    return 1 if all(is_truthy(apply_value(fn, (item,), ctx)) for item in seq) else Nil


def fold(ctx: Context, args: list) -> Expression:
    """(fold list init fn): left fold calling (fn acc item)."""
    if len(args) != 3:
        return Nil
    seq, acc, fn = args
    if not isinstance(seq, SEQUENCES) or not is_callable(fn):
        return acc
    for item in seq:
        acc = apply_value(fn, (acc, item), ctx)
    return acc


# -------------------------------
# Maps
# -------------------------------
def _map(args: list, count: int):
    if len(args) != count or not isinstance(args[0], MAPS):
        return None
    return args[0]


def keys(ctx: Context, args: list) -> Expression:
    m = _map(args, 1)
    return Nil if m is None else ExprList(m.keys())


def values(ctx: Context, args: list) -> Expression:
    m = _map(args, 1)
    return Nil if m is None else ExprList(m.values())


def contains_key(ctx: Context, args: list) -> Expression:
    m = _map(args, 2)
    if m is None:
        return Nil
    return 1 if args[1] in m else Nil


def merge(ctx: Context, args: list) -> Expression:
    """(merge a b): entries of b override a; both maps must be the same kind."""
    if len(args) != 2 or not isinstance(args[0], MAPS) or type(args[0]) is not type(args[1]):
        return Nil
    return args[0].merge(args[1])


def exports() -> dict[str, Expression]:
    return {
        "push": native(push),
        "pop": native(pop),
        "peek": native(peek),
        "reverse": native(reverse, doc="Reverse a list"),
        "sort": native(sort),
        "range": native(range_),
        "zip": native(zip_),
        "flatten": native(flatten, doc="Flatten nested lists"),
        "dedup": native(dedup),
        "enumerate": native(enumerate_),
        "get": native(get),
        "map": native(map_),
        "filter": native(filter_),
        "find": native(find),
        "any": native(any_, doc="Is fn truthy for any element?"),
        "all": native(all_, doc="Is fn truthy for every element?"),
        "fold": native(fold),
        "keys": native(keys, doc="List of map keys"),
        "values": native(values, doc="List of map values"),
        "contains_key": native(contains_key, doc="Does the map hold the key?"),
        "merge": native(merge),
    }
