from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError, OnionTypeError
from onion.types.context import Context
from onion.types.expr import ExprList, Function, NativeFunction, OrderedMap, Ref
from onion.types.nil import Nil
from onion.types.symbol import Symbol
from onion.evaluation.evaluator import evaluate
from onion.evaluation.special_forms.define_form import make_body, parse_params


def _parse_method(struct_name: Symbol, method_def: Expression, ctx: Context) -> Function:
    if not isinstance(method_def, ExprList) or len(method_def) < 3:
        raise OnionTypeError(
            f"struct {struct_name}: method must look like (name (params) body...), got {method_def!s}"
        )
    m_name = method_def[0]
    if not isinstance(m_name, Symbol):
        raise OnionTypeError(f"struct {struct_name}: method name must be a symbol, got {m_name!s}")
    params = parse_params(f"struct {struct_name}", method_def[1])
    return Function(params, make_body(method_def.items[2:]), ctx.clone(), m_name)


def struct_form(ctx: Context, args: tuple) -> Expression:
    """
    (struct Name (fields...) (method (params) body...)...)
    Binds Name to a constructor taking one argument per field. Each instance
    is a Ref holding a map of its fields and the shared method functions;
    methods see the instance as `self` when read through `.`.
    """
    if len(args) < 2:
        raise OnionArityError("struct requires a name and a field list")
    name = args[0]
    if not isinstance(name, Symbol):
        raise OnionTypeError(f"struct: name must be a symbol, got {name!s}")
    fields = parse_params(f"struct {name}", args[1])
    methods = [(m.name, m) for m in (_parse_method(name, d, ctx) for d in args[2:])]

    def construct(call_ctx: Context, ctor_args: tuple) -> Expression:
        if len(ctor_args) != len(fields):
            raise OnionArityError(
                f"{name} expected {len(fields)} arguments, got {len(ctor_args)}"
            )
        pairs = [(f, evaluate(a, call_ctx)) for f, a in zip(fields, ctor_args)]
        pairs.extend(methods)
        return Ref(OrderedMap(pairs))

    ctx.define(name, NativeFunction(construct, str(name), f"Construct a {name}"))
    return Nil
