from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError
from onion.types.context import Context
from onion.types.expr import Function
from onion.evaluation.special_forms.define_form import make_body, parse_params


def fun_form(ctx: Context, args: tuple) -> Expression:
    # (fun (params) body...) closes over the current context by reference
    if len(args) < 2:
        raise OnionArityError("fun requires a parameter list and a body")
    return Function(parse_params("fun", args[0]), make_body(args[1:]), ctx.clone())
