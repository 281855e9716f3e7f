from __future__ import annotations

from typing import Sequence


class OnionError(Exception):
    """ Base class for all Onion errors"""
    pass


class OnionSyntaxError(OnionError):
    """ Raised when source text cannot be parsed"""


class OnionParseError(OnionSyntaxError):
    """ Raised by the parser with the failing rule labels and input position.

    Parse errors are not fatal: the driver reports them and stops feeding the
    offending statement.
    """

    def __init__(
        self,
        message: str,
        source: str,
        position: int,
        labels: Sequence[str] = (),
    ):
        self.message = message
        self.source = source
        self.position = position
        self.labels = list(labels)
        super().__init__(self._summary())

    @property
    def line(self) -> int:
        return self.source.count("\n", 0, self.position) + 1

    @property
    def column(self) -> int:
        start = self.source.rfind("\n", 0, self.position) + 1
        return self.position - start + 1

    def _summary(self) -> str:
        where = f"line {self.line}, column {self.column}"
        if self.labels:
            return f"{self.message} (in {' > '.join(self.labels)}) at {where}"
        return f"{self.message} at {where}"

    def render(self) -> str:
        """Return the summary followed by the offending line and a caret."""
        start = self.source.rfind("\n", 0, self.position) + 1
        end = self.source.find("\n", self.position)
        if end == -1:
            end = len(self.source)
        text = self.source[start:end]
        pointer = " " * (self.column - 1) + "^"
        return f"Parse error: {self._summary()}\n  {text}\n  {pointer}"


class OnionRuntimeError(OnionError):
    """ Raised when evaluation fails; fatal by policy"""


class OnionArityError(OnionRuntimeError):
    """ Raised when the number of arguments passed to a function is incorrect"""


class OnionTypeError(OnionRuntimeError):
    """ Raised when the types of arguments passed to a function are incorrect"""


class OnionZeroDivisionError(OnionRuntimeError):
    """ Raised on integer or float division by zero"""
