"""Textual rendering of expressions.

`to_display` is what `print` shows: strings appear raw, everything else in
source-like syntax. `to_source` quotes and escapes strings so the output can
be read back. Refs render as the value they hold; a Ref that is reached
again while it is being rendered prints as `<ref ...>` so self-referential
object graphs terminate.
"""

from __future__ import annotations

from io import StringIO

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

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}


def _quote(s: str) -> str:
    return '"' + "".join(_ESCAPES.get(c, c) for c in s) + '"'


def _write_seq(buffer: StringIO, items, quote: bool, active: set) -> None:
    first = True
    for item in items:
        if not first:
            buffer.write(" ")
        _write(buffer, item, quote, active)
        first = False


def _write(buffer: StringIO, x: Expression, quote: bool, active: set) -> None:
    if isinstance(x, NilType):
        buffer.write("nil")
    elif isinstance(x, str):
        buffer.write(_quote(x) if quote else x)
    elif isinstance(x, float):
        buffer.write(repr(x))
    elif isinstance(x, ExprList):
        buffer.write("(")
        _write_seq(buffer, x.items, quote, active)
        buffer.write(")")
    elif isinstance(x, Vector):
        buffer.write("(vector")
        if x.items:
            buffer.write(" ")
            _write_seq(buffer, x.items, quote, active)
        buffer.write(")")
    elif isinstance(x, (OrderedMap, UnorderedMap)):
        buffer.write("[" if isinstance(x, OrderedMap) else "#[")
        _write_seq(buffer, (e for kv in x.items() for e in kv), quote, active)
        buffer.write("]")
    elif isinstance(x, Tagged):
        buffer.write(f"{x.tag} ")
        _write(buffer, x.value, quote, active)
    elif isinstance(x, Quoted):
        buffer.write("'")
        _write(buffer, x.expr, quote, active)
    elif isinstance(x, NativeFunction):
        buffer.write(f"<extern: {x.short_desc}>")
    elif isinstance(x, Function):
        buffer.write("<function params: (")
        buffer.write(" ".join(str(p) for p in x.params))
        buffer.write(") body: ")
        _write(buffer, x.body, quote, active)
        buffer.write(">")
    elif isinstance(x, Ref):
        if id(x) in active:
            buffer.write("<ref ...>")
            return
        active.add(id(x))
        try:
            _write(buffer, x.get(), quote, active)
        finally:
            active.discard(id(x))
    else:
        buffer.write(str(x))


def to_display(x: Expression) -> str:
    with StringIO() as buffer:
        _write(buffer, x, False, set())
        return buffer.getvalue()


def to_source(x: Expression) -> str:
    with StringIO() as buffer:
        _write(buffer, x, True, set())
        return buffer.getvalue()
