"""Library modules: families of natives packaged as Ref-wrapped maps.

A module is an ordered map from export name to value held in a Ref and bound
under the module name, so `Math.sqrt` is plain property access. Unlike the
core natives, library functions return nil on bad input rather than raising.
"""

from __future__ import annotations

from typing import Mapping

from onion import Expression
from onion.logging_config import get_logger
from onion.types.context import Context
from onion.types.expr import OrderedMap, Ref
from onion.types.symbol import Symbol

logger = get_logger(__name__)


def make_module(exports: Mapping[str, Expression]) -> Ref:
    return Ref(OrderedMap((Symbol(name), value) for name, value in exports.items()))


def define_module(ctx: Context, name: str, exports: Mapping[str, Expression]) -> Ref:
    module = make_module(exports)
    ctx.define(Symbol(name), module)
    logger.debug("Registered module %s with %d exports", name, len(exports))
    return module


def register_all(ctx: Context) -> None:
    from onion.modules import collections_module, math_module, reflect_module, string_module

    for mod in (math_module, string_module, reflect_module, collections_module):
        define_module(ctx, mod.MODULE_NAME, mod.exports())
