from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError, OnionTypeError
from onion.types.context import Context
from onion.types.expr import ExprList, Function, NativeFunction
from onion.types.nil import Nil
from onion.types.operators import Assoc, OpInfo
from onion.types.symbol import Symbol
from onion.evaluation.evaluator import evaluate

DO = Symbol("do")
RIGHT = Symbol("right")
UNARY = Symbol("unary")


def parse_params(form: str, params: Expression) -> tuple[Symbol, ...]:
    """Accept `(a b c)`, a lone symbol `a`, or nil/`()` for no parameters."""
    if params is Nil:
        return ()
    if isinstance(params, Symbol):
        return (params,)
    if isinstance(params, ExprList):
        for p in params:
            if not isinstance(p, Symbol):
                raise OnionTypeError(f"{form}: parameter {p!s} is not a symbol")
        return tuple(params)
    raise OnionTypeError(f"{form}: expected a parameter list, got {params!s}")


def make_body(forms: tuple) -> Expression:
    """A single body form stays as is; several become an implicit `(do ...)`."""
    if not forms:
        return Nil
    if len(forms) == 1:
        return forms[0]
    return ExprList((DO, *forms))


def def_form(ctx: Context, args: tuple) -> Expression:
    """
    (def name value)
    Bind the value in the innermost frame. The key is not evaluated and may be
    any expression; evaluating an equal expression later yields the value.
    """
    if len(args) != 2:
        raise OnionArityError("def requires exactly 2 arguments")
    key, val_expr = args
    value = evaluate(val_expr, ctx)
    ctx.define(key, value)
    return value


def defun_form(ctx: Context, args: tuple) -> Expression:
    """
    (defun name (params) body...)
    The function re-binds its own name in every call frame, so it may recurse
    even when called through another binding.
    """
    if len(args) < 3:
        raise OnionArityError("defun requires a name, a parameter list and a body")
    name = args[0]
    if not isinstance(name, Symbol):
        raise OnionTypeError(f"defun: function name must be a symbol, got {name!s}")
    fn = Function(parse_params("defun", args[1]), make_body(args[2:]), ctx.clone(), name)
    ctx.define(name, fn)
    return fn


def defop_form(ctx: Context, args: tuple) -> Expression:
    """
    (defop "name" precedence fn ['right] ['unary])
    Register an operator in the live table and bind its name to fn. Only
    statements parsed after this one see the new operator.
    """
    if len(args) < 3:
        raise OnionArityError("defop requires a name, a precedence and a function")
    name, precedence, fn = (evaluate(a, ctx) for a in args[:3])
    flags = {evaluate(a, ctx) for a in args[3:]}
    if isinstance(name, Symbol):
        name = str(name)
    if not isinstance(name, str) or not name or any(c.isspace() for c in name):
        raise OnionTypeError(f"defop: operator name must be a non-empty string, got {name!s}")
    if type(precedence) is not int or precedence < 0:
        raise OnionTypeError(f"defop: precedence must be a non-negative int, got {precedence!s}")
    if not isinstance(fn, (Function, NativeFunction)):
        raise OnionTypeError(f"defop: {fn!s} is not a function")
    unknown = flags - {RIGHT, UNARY}
    if unknown:
        raise OnionTypeError(f"defop: unknown flag {next(iter(unknown))!s}")
    assoc = Assoc.RIGHT if RIGHT in flags else Assoc.LEFT
    ctx.define_op(name, OpInfo(precedence, assoc, UNARY in flags), fn)
    return fn
