# Core type aliases for Onion's data model.
# Plain Python values (int, float, str) are used for scalar expressions; the
# composite variants (lists, vectors, maps, functions, refs...) live in
# onion.types.expr so they can carry the hand-written order/hash contract.
#
# Naming guidance:
# - Expression: both the parsed form (AST node) and the evaluated value. The
#   language does not distinguish the two.
# - NativeFn: the host-side signature every native implements. It receives
#   the evaluation Context and the *unevaluated* argument tuple.

from typing import Any, Callable

# Runtime value / syntactic form alias
Expression = Any

# Native function signature: (ctx, args) -> Expression
NativeFn = Callable[..., Expression]

__version__ = "0.1.0"
