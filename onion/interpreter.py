from __future__ import annotations

from typing import Iterator, Optional

from onion import Expression
from onion.builtin import stdlib
from onion.evaluation.evaluator import evaluate
from onion.logging_config import get_logger
from onion.reader.parser import Parser
from onion.types.context import Context
from onion.types.nil import Nil

logger = get_logger(__name__)


class Interpreter:
    """
    A streaming interpreter for Onion programs.

    Statements are parsed and evaluated one at a time against a single root
    Context, so definitions and operators persist across `eval` calls.
    """

    def __init__(self, ctx: Optional[Context] = None):
        self.ctx = ctx if ctx is not None else stdlib()

    def statements(self, code: str) -> Iterator[tuple[Expression, Expression]]:
        """Yield (statement, value) pairs, evaluating each before parsing the next."""
        for expr in Parser(code, self.ctx).parse_all():
            logger.debug("Parsed: %r", expr)
            yield expr, evaluate(expr, self.ctx)

    def eval(self, code: str) -> Expression:
        """Evaluate every statement in `code` and return the last value (nil if none)."""
        result = Nil
        for _, result in self.statements(code):
            pass
        return result

    def eval_all(self, code: str) -> list[Expression]:
        return [value for _, value in self.statements(code)]
