"""
  Onion Reader: operator-aware tokenizer and Pratt expression parser

- Streaming: `Parser.parse_all` yields one top-level statement at a time, and
  the caller is expected to evaluate it before asking for the next one.
- The operator table is consulted live on every token, so an operator
  defined by statement N changes how statement N+1 is tokenized and grouped.
- Emits the expression model directly:

    - nil            -> Nil
    - 42, -7, 0xff   -> int
    - 1.5, -0.25     -> float
    - "text"         -> str
    - name           -> Symbol
    - 'e             -> Quoted(e)
    - (a b c)        -> ExprList
    - [k v k v]      -> OrderedMap
    - #[k v k v]     -> UnorderedMap
    - {a b c}        -> (do a b c)
    - a op b         -> (op a b)
    - op a           -> (op a)   for unary operators
"""

from __future__ import annotations

import re
from typing import Iterator, Optional

from onion import Expression
from onion.errors import OnionParseError
from onion.types.context import Context
from onion.types.expr import ExprList, OrderedMap, Quoted, UnorderedMap
from onion.types.nil import Nil
from onion.types.symbol import Symbol

INT_RE = re.compile(r"[+-]?(?:0[xX][0-9A-Fa-f]+|[0-9]+)")
FLOAT_RE = re.compile(r"[+-]?[0-9]+\.[0-9]+")

DELIMITERS = frozenset('()[]{}",')
ESCAPES = {"\\": "\\", '"': '"', "n": "\n", "t": "\t"}

I64_MIN = -(1 << 63)
I64_MAX = (1 << 63) - 1

DO = Symbol("do")


def _is_word_char(c: str) -> bool:
    return c.isalnum() or c == "_"


class Parser:
    """Recursive-descent reader over one source string.

    `pos` is an absolute offset into `source` so errors can point back into
    the original text.
    """

    def __init__(self, source: str, ctx: Context, pos: int = 0):
        self.source = source
        self.ctx = ctx
        self.pos = pos
        self.labels: list[str] = []
        # Position of a unary operator that ended an expression in infix
        # position; it is read back as a plain identifier
        self._plain_at: Optional[int] = None

    # ------------------------------------------------------------------
    # Low level scanning
    # ------------------------------------------------------------------

    def error(self, message: str, position: Optional[int] = None) -> OnionParseError:
        return OnionParseError(
            message,
            self.source,
            self.pos if position is None else position,
            self.labels,
        )

    def skip_whitespace(self) -> None:
        src, n = self.source, len(self.source)
        pos = self.pos
        while pos < n:
            c = src[pos]
            if c.isspace():
                pos += 1
            elif c == ";":
                end = src.find("\n", pos)
                pos = n if end == -1 else end + 1
            else:
                break
        self.pos = pos

    def at_end(self) -> bool:
        self.skip_whitespace()
        return self.pos >= len(self.source)

    def _scan_symbol(self) -> Optional[tuple[str, int]]:
        """Peek the symbol-like token at the cursor: (text, end) or None.

        Registered operators win, longest first. An operator spelled with a
        leading word character only matches on a word boundary, so `def` does
        not split `define`. Otherwise the token runs until whitespace, a
        delimiter, or the start of a punctuation operator (`x.y` -> `x`).
        """
        self.skip_whitespace()
        src, start = self.source, self.pos
        if start >= len(src):
            return None
        ops = self.ctx.operators.longest_first()
        for op in ops:
            if src.startswith(op, start):
                end = start + len(op)
                if _is_word_char(op[0]) and end < len(src) and _is_word_char(src[end]):
                    continue
                return op, end
        punctuation = [op for op in ops if not _is_word_char(op[0])]
        end = start
        while end < len(src):
            c = src[end]
            if c.isspace() or c in DELIMITERS or c == ";":
                break
            if any(src.startswith(op, end) for op in punctuation):
                break
            end += 1
        if end == start:
            return None
        return src[start:end], end

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------

    def parse_expression(self, min_bp: int = 0) -> Expression:
        """Precedence climbing over the live operator table."""
        token = self._scan_symbol()
        info = self.ctx.get_op(token[0]) if token else None
        plain, self._plain_at = self.pos == self._plain_at, None
        if info is not None and info.unary and not plain:
            self.pos = token[1]
            rhs = self.parse_expression(info.precedence)
            lhs = ExprList((Symbol(token[0]), rhs))
        else:
            lhs = self.parse_atom()

        while True:
            token = self._scan_symbol()
            if token is None:
                break
            info = self.ctx.get_op(token[0])
            if info is None or info.precedence < min_bp:
                break
            if info.unary:
                self._plain_at = self.pos
                break
            self.pos = token[1]
            rhs = self.parse_expression(info.right_binding_power())
            lhs = ExprList((Symbol(token[0]), lhs, rhs))
        return lhs

    def parse_atom(self) -> Expression:
        self.skip_whitespace()
        src, pos = self.source, self.pos
        if pos >= len(src):
            raise self.error("unexpected end of input, expected an expression")

        c = src[pos]
        if src.startswith("nil", pos) and not (
            pos + 3 < len(src) and _is_word_char(src[pos + 3])
        ):
            self.pos = pos + 3
            return Nil

        m = FLOAT_RE.match(src, pos)
        if m:
            self.pos = m.end()
            return float(m.group())

        m = INT_RE.match(src, pos)
        if m:
            return self._parse_int(m)

        if c == '"':
            return self._parse_string()
        if c == "'":
            self.pos += 1
            self.labels.append("quote")
            try:
                return Quoted(self.parse_expression(0))
            finally:
                self.labels.pop()
        if c == "{":
            items = self._parse_sequence("{", "}", "block")
            return ExprList((DO, *items))
        if src.startswith("#[", pos):
            items = self._parse_sequence("#[", "]", "map")
            return UnorderedMap.from_flat(items)
        if c == "[":
            items = self._parse_sequence("[", "]", "map")
            return OrderedMap.from_flat(items)
        if c == "(":
            return ExprList(self._parse_sequence("(", ")", "list"))

        token = self._scan_symbol()
        if token is None:
            raise self.error(f"unexpected character {c!r}")
        self.pos = token[1]
        return Symbol(token[0])

    def _parse_int(self, m: re.Match) -> int:
        text = m.group()
        digits = text.lstrip("+-")
        value = int(digits, 16) if digits[:2] in ("0x", "0X") else int(digits)
        if text.startswith("-"):
            value = -value
        if not I64_MIN <= value <= I64_MAX:
            self.labels.append("int")
            try:
                raise self.error(f"integer literal {text} out of 64-bit range", m.start())
            finally:
                self.labels.pop()
        self.pos = m.end()
        return value

    def _parse_string(self) -> str:
        src, start = self.source, self.pos
        self.labels.append("string")
        try:
            out: list[str] = []
            pos = start + 1
            while pos < len(src):
                c = src[pos]
                if c == '"':
                    self.pos = pos + 1
                    return "".join(out)
                if c == "\\" and pos + 1 < len(src):
                    nxt = src[pos + 1]
                    out.append(ESCAPES.get(nxt, "\\" + nxt))
                    pos += 2
                    continue
                out.append(c)
                pos += 1
            raise self.error("unterminated string literal", start)
        finally:
            self.labels.pop()

    def _parse_sequence(self, opener: str, closer: str, label: str) -> list[Expression]:
        start = self.pos
        self.pos += len(opener)
        self.labels.append(label)
        try:
            items: list[Expression] = []
            while True:
                self.skip_whitespace()
                if self.pos >= len(self.source):
                    raise self.error(f"unterminated {label}, expected {closer!r}", start)
                if self.source[self.pos] == closer:
                    self.pos += 1
                    return items
                items.append(self.parse_expression(0))
        finally:
            self.labels.pop()

    # ------------------------------------------------------------------
    # Statements
    # ------------------------------------------------------------------

    def parse_one(self) -> Expression:
        if self.at_end():
            raise self.error("unexpected end of input, expected an expression")
        return self.parse_expression(0)

    def parse_all(self) -> Iterator[Expression]:
        """Yield top-level statements lazily, one per `next()`."""
        while not self.at_end():
            yield self.parse_expression(0)

    def rest(self) -> str:
        return self.source[self.pos:]


def parse_one(text: str, ctx: Context) -> tuple[str, Expression]:
    """Parse a single expression; return the unconsumed text and the expression."""
    parser = Parser(text, ctx)
    expr = parser.parse_one()
    return parser.rest(), expr


def parse_program(text: str, ctx: Context) -> list[Expression]:
    """Parse every statement up front.

    Operators defined by the program are not registered until the statements
    are evaluated, so prefer `Parser.parse_all` when interleaving matters.
    """
    return list(Parser(text, ctx).parse_all())
