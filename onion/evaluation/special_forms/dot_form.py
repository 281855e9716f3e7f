"""Property access on Ref-wrapped maps: the object model of the language.

Objects, struct instances and modules are all a Ref holding a map; `.` reads
or replaces entries of that map. Maps are values, so a set swaps the whole
map held by the Ref for an updated copy. Every holder of the Ref sees it.
"""

from __future__ import annotations

from onion import Expression
from onion.errors import OnionArityError, OnionTypeError
from onion.types.context import Context
from onion.types.expr import Function, OrderedMap, Ref, UnorderedMap
from onion.types.nil import Nil
from onion.types.symbol import Symbol
from onion.evaluation.evaluator import evaluate

SELF = Symbol("self")


def bind_self(fn: Function, obj: Ref) -> Function:
    """Copy of `fn` whose environment binds `self` to `obj`.

    The binding lives in a new frame on top of the captured scope, so the
    frame the method was defined in is left untouched.
    """
    env = fn.env.child()
    env.define(SELF, obj)
    return fn.with_env(env)


def _target_map(obj: Expression, key: Expression):
    if not isinstance(obj, Ref):
        raise OnionTypeError(f"Cannot access property {key!s} of {obj!s}: not a reference")
    target = obj.get()
    if not isinstance(target, (OrderedMap, UnorderedMap)):
        raise OnionTypeError(f"Cannot access property {key!s}: reference does not hold a map")
    return target


def get_property(obj: Ref, key_expr: Expression, ctx: Context) -> Expression:
    target = _target_map(obj, key_expr)
    # A bare symbol names the property literally, even if it is also bound
    if isinstance(key_expr, Symbol) and key_expr in target:
        value = target.get(key_expr)
    else:
        value = target.get(evaluate(key_expr, ctx), Nil)
    if isinstance(value, Function):
        return bind_self(value, obj)
    return value


def set_property(obj: Ref, key: Expression, value: Expression) -> Expression:
    _target_map(obj, key)
    obj.update(lambda m: m.assoc(key, value))
    return value


def dot_form(ctx: Context, args: tuple) -> Expression:
    """
    (. obj key)        read a property; nil when absent
    (. obj key value)  replace a property and return value
    """
    if len(args) not in (2, 3):
        raise OnionArityError(". requires an object, a key and an optional value")
    obj = evaluate(args[0], ctx)
    if len(args) == 2:
        return get_property(obj, args[1], ctx)
    key = evaluate(args[1], ctx)
    value = evaluate(args[2], ctx)
    return set_property(obj, key, value)


def new_form(ctx: Context, args: tuple) -> Expression:
    # (new value) wraps the value in a fresh shared cell
    if len(args) != 1:
        raise OnionArityError("new requires exactly 1 argument")
    return Ref(evaluate(args[0], ctx))
