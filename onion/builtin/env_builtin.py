"""Built-in functions for the Onion runtime.

Arithmetic, comparison, list helpers, printing and constants. Every function
here takes `(ctx, values)` with arguments already evaluated; `register` and
the operator table in `onion.builtin` wrap them as natives.

Failure policy: arithmetic and comparisons raise on misuse. The list helpers
(`len`, `length`, `first`, `rest`, `nth`, `take`, `drop`) return nil on bad
input instead.
"""
from __future__ import annotations

import math
import sys

from onion import Expression
from onion.debug_utils.pprint import to_display
from onion.errors import OnionArityError, OnionTypeError, OnionZeroDivisionError
from onion.evaluation.native import is_number, native, wrap_i64
from onion.types.context import Context
from onion.types.expr import ExprList, OrderedMap, Tagged, UnorderedMap, Vector
from onion.types.nil import Nil
from onion.types.ordering import equal
from onion.types.symbol import Symbol

TRUE = 1


def _truth(flag: bool) -> Expression:
    return TRUE if flag else Nil


def _number(name: str, x: Expression) -> Expression:
    if not is_number(x):
        raise OnionTypeError(f"{name}: expected a number, got {to_display(x)}")
    return x


def _num_result(x) -> Expression:
    return wrap_i64(x) if type(x) is int else x


# -------------------------------
# Arithmetic
# -------------------------------
def add(ctx: Context, args: list) -> Expression:
    """Add numbers, or concatenate strings, lists and vectors, or merge maps.

    The first argument decides the kind of sum; nil with no arguments.
    """
    if not args:
        return Nil
    total = args[0]
    for x in args[1:]:
        if is_number(total) and is_number(x):
            total = _num_result(total + x)
        elif isinstance(total, str) and isinstance(x, str):
            total = total + x
        elif type(total) in (ExprList, Vector) and type(x) in (ExprList, Vector):
            total = type(total)(total.items + x.items)
        elif isinstance(total, (OrderedMap, UnorderedMap)) and isinstance(x, (OrderedMap, UnorderedMap)):
            total = total.merge(x)
        else:
            raise OnionTypeError(f"+: cannot add {to_display(x)} to {to_display(total)}")
    if len(args) == 1:
        if not (is_number(total) or isinstance(total, (str, ExprList, Vector, OrderedMap, UnorderedMap))):
            raise OnionTypeError(f"+: cannot add {to_display(total)}")
    return total


def sub(ctx: Context, args: list) -> Expression:
    """Subtract the rest from the first number; negate a single argument."""
    if not args:
        raise OnionArityError("- requires at least 1 argument")
    values = [_number("-", x) for x in args]
    if len(values) == 1:
        return _num_result(-values[0])
    result = values[0]
    for x in values[1:]:
        result = result - x
    return _num_result(result)


def mul(ctx: Context, args: list) -> Expression:
    """Return the product of all arguments; 1 for no arguments."""
    result = 1
    for x in args:
        result = _num_result(result * _number("*", x))
    return result


def _int_div(a: int, b: int) -> int:
    # Truncates toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def div(ctx: Context, args: list) -> Expression:
    """Divide left to right. Integer division truncates toward zero."""
    if len(args) < 2:
        raise OnionArityError("/ requires at least 2 arguments")
    result = _number("/", args[0])
    for x in args[1:]:
        x = _number("/", x)
        if x == 0:
            raise OnionZeroDivisionError("Division by zero")
        if type(result) is int and type(x) is int:
            result = wrap_i64(_int_div(result, x))
        else:
            result = result / x
    return result


def mod(ctx: Context, args: list) -> Expression:
    """(% n d): remainder with the sign of n."""
    if len(args) != 2:
        raise OnionArityError("% requires exactly 2 arguments")
    n, d = _number("%", args[0]), _number("%", args[1])
    if d == 0:
        raise OnionZeroDivisionError("Modulo by zero")
    if type(n) is int and type(d) is int:
        return n - d * _int_div(n, d)
    return math.fmod(n, d)


def negate(ctx: Context, args: list) -> Expression:
    """Unary `!`: numeric negation for numbers, logical not otherwise."""
    if len(args) != 1:
        raise OnionArityError("! requires exactly 1 argument")
    x = args[0]
    if is_number(x):
        return _num_result(-x)
    return _truth(x is Nil)


# -------------------------------
# Comparison
# -------------------------------
def equals(ctx: Context, args: list) -> Expression:
    """1 if all arguments are equal (or zero/one arg), else nil."""
    first = args[0] if args else Nil
    return _truth(all(equal(first, other) for other in args[1:]))


def not_equals(ctx: Context, args: list) -> Expression:
    return _truth(equals(ctx, args) is Nil)


def _comparable(name: str, a: Expression, b: Expression) -> None:
    if is_number(a) and is_number(b):
        return
    if isinstance(a, str) and isinstance(b, str):
        return
    raise OnionTypeError(f"{name}: cannot compare {to_display(a)} with {to_display(b)}")


def _chain(name: str, args: list, test) -> Expression:
    for a, b in zip(args, args[1:]):
        _comparable(name, a, b)
        if not test(a, b):
            return Nil
    return TRUE


def lt(ctx: Context, args: list) -> Expression:
    """Chainable less-than over numbers or strings."""
    return _chain("<", args, lambda a, b: a < b)


def gt(ctx: Context, args: list) -> Expression:
    return _chain(">", args, lambda a, b: a > b)


def lte(ctx: Context, args: list) -> Expression:
    if len(args) != 2:
        raise OnionArityError("<= requires exactly 2 arguments")
    return _chain("<=", args, lambda a, b: a <= b)


def gte(ctx: Context, args: list) -> Expression:
    if len(args) != 2:
        raise OnionArityError(">= requires exactly 2 arguments")
    return _chain(">=", args, lambda a, b: a >= b)


# -------------------------------
# Lists
# -------------------------------
def list_builtin(ctx: Context, args: list) -> Expression:
    """Create a list of the evaluated arguments."""
    return ExprList(args)


def vector_builtin(ctx: Context, args: list) -> Expression:
    """Create a vector of the evaluated arguments."""
    return Vector(args)


def tag(ctx: Context, args: list) -> Expression:
    """(tag 'name value) wraps value with a symbol tag."""
    if len(args) != 2:
        raise OnionArityError("tag requires exactly 2 arguments")
    name, value = args
    if not isinstance(name, Symbol):
        raise OnionTypeError(f"tag: expected a symbol, got {to_display(name)}")
    return Tagged(name, value)


def length(ctx: Context, args: list) -> Expression:
    """Length of a list, vector, string or map; nil for anything else."""
    if len(args) != 1:
        return Nil
    x = args[0]
    if isinstance(x, (str, ExprList, Vector, OrderedMap, UnorderedMap)):
        return len(x)
    return Nil


def first(ctx: Context, args: list) -> Expression:
    """Return the first element of a list/vector."""
    if not args or not isinstance(args[0], (ExprList, Vector)) or not args[0].items:
        return Nil
    return args[0].items[0]


def rest(ctx: Context, args: list) -> Expression:
    """Return all but the first element of a list/vector."""
    if not args or not isinstance(args[0], (ExprList, Vector)):
        return Nil
    return args[0][1:]


def cons(ctx: Context, args: list) -> Expression:
    """Add an element to the front of a list; a nil tail starts a new list."""
    if len(args) != 2:
        raise OnionArityError("cons requires exactly 2 arguments")
    head, tail = args
    if tail is Nil:
        return ExprList((head,))
    if isinstance(tail, (ExprList, Vector)):
        return type(tail)((head, *tail.items))
    raise OnionTypeError(f"cons: expected a list, got {to_display(tail)}")


def _index_args(args: list):
    if len(args) != 2:
        return None
    n, seq = args
    if type(n) is not int or not isinstance(seq, (ExprList, Vector)):
        return None
    return n, seq


def nth(ctx: Context, args: list) -> Expression:
    """(nth index list): element at index, nil when out of range."""
    parsed = _index_args(args)
    if parsed is None:
        return Nil
    n, seq = parsed
    if n < 0 or n >= len(seq):
        return Nil
    return seq.items[n]


def take(ctx: Context, args: list) -> Expression:
    """(take n list): the first n elements."""
    parsed = _index_args(args)
    if parsed is None:
        return Nil
    n, seq = parsed
    return seq[: max(n, 0)]


def drop(ctx: Context, args: list) -> Expression:
    """(drop n list): everything after the first n elements."""
    parsed = _index_args(args)
    if parsed is None:
        return Nil
    n, seq = parsed
    return seq[max(n, 0):]


# -------------------------------
# Output and math
# -------------------------------
def print_builtin(ctx: Context, args: list) -> Expression:
    """Print space-separated values without a newline; returns the last value."""
    sys.stdout.write(" ".join(to_display(a) for a in args))
    return args[-1] if args else Nil


def println_builtin(ctx: Context, args: list) -> Expression:
    """Print space-separated values followed by a newline; returns the last value."""
    sys.stdout.write(" ".join(to_display(a) for a in args) + "\n")
    return args[-1] if args else Nil


def sqrt(ctx: Context, args: list) -> Expression:
    """Square root as a float."""
    if len(args) != 1:
        raise OnionArityError("sqrt requires exactly 1 argument")
    x = _number("sqrt", args[0])
    if x < 0:
        return math.nan
    return math.sqrt(x)


def pow_builtin(ctx: Context, args: list) -> Expression:
    """(pow base exponent) as a float."""
    if len(args) != 2:
        raise OnionArityError("pow requires exactly 2 arguments")
    base, exp = _number("pow", args[0]), _number("pow", args[1])
    try:
        return math.pow(base, exp)
    except (OverflowError, ValueError):
        return math.nan


def register(ctx: Context) -> None:
    """Register the builtin functions and constants into the given context."""
    ctx.update(
        {
            Symbol("list"): native(list_builtin, "list"),
            Symbol("vector"): native(vector_builtin, "vector"),
            Symbol("tag"): native(tag),
            Symbol("len"): native(length, "len"),
            Symbol("length"): native(length, "length"),
            Symbol("first"): native(first),
            Symbol("rest"): native(rest),
            Symbol("cons"): native(cons),
            Symbol("nth"): native(nth),
            Symbol("take"): native(take),
            Symbol("drop"): native(drop),
            Symbol("print"): native(print_builtin, "print"),
            Symbol("println"): native(println_builtin, "println"),
            Symbol("sqrt"): native(sqrt),
            Symbol("pow"): native(pow_builtin, "pow"),
        }
    )
    ctx.define(Symbol("PI"), math.pi)
    ctx.define(Symbol("E"), math.e)
