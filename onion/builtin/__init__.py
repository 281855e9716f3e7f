"""Core bootstrap: the operators and natives every program starts with.

The operator table of a fresh Context is empty; `stdlib()` defines the
standard operators (each also bound as a callable under its own name), the
control and definition natives, the builtin functions and the library
modules.
"""

from __future__ import annotations

from onion.builtin import env_builtin
from onion.evaluation.native import native
from onion.evaluation.special_forms import OPERATOR_FORMS, SPECIAL_FORMS
from onion.logging_config import get_logger
from onion.types.context import Context
from onion.types.expr import NativeFunction
from onion.types.operators import Assoc, OpInfo

logger = get_logger(__name__)

LEFT, RIGHT = Assoc.LEFT, Assoc.RIGHT

# name -> (precedence, associativity, unary)
STANDARD_OPERATORS = {
    ".": (100, LEFT, False),
    "*": (20, LEFT, False),
    "/": (20, LEFT, False),
    "%": (20, LEFT, False),
    "!": (15, RIGHT, True),
    "+": (10, LEFT, False),
    "-": (10, LEFT, False),
    "<=": (10, LEFT, False),
    ">=": (10, LEFT, False),
    "==": (5, LEFT, False),
    "!=": (5, LEFT, False),
    "<": (5, LEFT, False),
    ">": (5, LEFT, False),
    "=": (5, RIGHT, False),
    "?": (3, RIGHT, False),
    "new": (0, RIGHT, True),
    "def": (0, RIGHT, False),
    "fun": (0, RIGHT, False),
}

STRICT_OPERATORS = {
    "*": env_builtin.mul,
    "/": env_builtin.div,
    "%": env_builtin.mod,
    "!": env_builtin.negate,
    "+": env_builtin.add,
    "-": env_builtin.sub,
    "<=": env_builtin.lte,
    ">=": env_builtin.gte,
    "==": env_builtin.equals,
    "!=": env_builtin.not_equals,
    "<": env_builtin.lt,
    ">": env_builtin.gt,
}


def _operator_native(name: str) -> NativeFunction:
    if name in OPERATOR_FORMS:
        return native(OPERATOR_FORMS[name], name, strict=False)
    return native(STRICT_OPERATORS[name], name)


def define_standard_operators(ctx: Context) -> None:
    for name, (precedence, assoc, unary) in STANDARD_OPERATORS.items():
        ctx.define_op(name, OpInfo(precedence, assoc, unary), _operator_native(name))


def define_special_forms(ctx: Context) -> None:
    for sym, form in SPECIAL_FORMS.items():
        ctx.define(sym, native(form, str(sym), strict=False))


def stdlib() -> Context:
    """Create a fresh root Context with the full standard environment."""
    from onion.modules import register_all

    ctx = Context()
    define_standard_operators(ctx)
    define_special_forms(ctx)
    env_builtin.register(ctx)
    register_all(ctx)
    logger.debug("Bootstrapped stdlib with %d operators", len(ctx.operators))
    return ctx
