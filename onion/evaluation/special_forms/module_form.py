from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError, OnionTypeError
from onion.logging_config import get_logger
from onion.types.context import Context
from onion.types.expr import OrderedMap, Ref
from onion.types.symbol import Symbol
from onion.evaluation.evaluator import evaluate_all

logger = get_logger(__name__)


def module_form(ctx: Context, args: tuple) -> Expression:
    """
    (module Name body...)
    Evaluate the body in a child scope, then export every binding made in
    that scope as a map wrapped in a Ref and bound to Name in the outer frame.
    Definitions inside the module keep seeing each other through the child
    scope they captured.
    """
    if not args:
        raise OnionArityError("module requires a name")
    name = args[0]
    if not isinstance(name, Symbol):
        raise OnionTypeError(f"module: name must be a symbol, got {name!s}")

    module_ctx = ctx.child()
    evaluate_all(args[1:], module_ctx)

    exports = module_ctx.scope.items()
    logger.debug("Harvested module %s: %d bindings", name, len(exports))
    module = Ref(OrderedMap(exports))
    ctx.define(name, module)
    return module
