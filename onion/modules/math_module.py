from __future__ import annotations

import math
import random

from onion import Expression
from onion.evaluation.native import is_number, native, wrap_i64
from onion.types.context import Context
from onion.types.nil import Nil

MODULE_NAME = "Math"


def _one_number(args: list):
    if len(args) != 1 or not is_number(args[0]):
        return None
    return args[0]


def _float_fn(fn):
    def wrapper(ctx: Context, args: list) -> Expression:
        x = _one_number(args)
        if x is None:
            return Nil
        try:
            return fn(x)
        except (ValueError, OverflowError):
            return math.nan
    wrapper.__name__ = fn.__name__
    return wrapper


def _to_int_fn(fn):
    """Integers pass through unchanged; floats are rounded by `fn`."""
    def wrapper(ctx: Context, args: list) -> Expression:
        x = _one_number(args)
        if x is None:
            return Nil
        if type(x) is int:
            return x
        if math.isnan(x) or math.isinf(x):
            return Nil
        return wrap_i64(int(fn(x)))
    return wrapper


def _round_half_away(x: float) -> float:
    return math.floor(x + 0.5) if x >= 0 else math.ceil(x - 0.5)


def abs_(ctx: Context, args: list) -> Expression:
    """Absolute value."""
    x = _one_number(args)
    if x is None:
        return Nil
    return wrap_i64(abs(x)) if type(x) is int else abs(x)


def _extreme(pick):
    def wrapper(ctx: Context, args: list) -> Expression:
        best = Nil
        for x in args:
            if not is_number(x):
                continue
            if best is Nil or pick(x, best):
                best = x
        return best
    return wrapper


def log(ctx: Context, args: list) -> Expression:
    """(log n base): logarithm of n in the given base."""
    if len(args) != 2 or not all(is_number(a) for a in args):
        return Nil
    n, base = args
    try:
        return math.log(n, base)
    except (ValueError, ZeroDivisionError):
        return math.nan


def sign(ctx: Context, args: list) -> Expression:
    """Sign of number (-1, 0, 1)."""
    x = _one_number(args)
    if x is None:
        return Nil
    return (x > 0) - (x < 0)


def clamp(ctx: Context, args: list) -> Expression:
    """(clamp value lo hi) as a float."""
    if len(args) != 3 or not all(is_number(a) for a in args):
        return Nil
    v, lo, hi = (float(a) for a in args)
    return min(max(v, lo), hi)


def rand(ctx: Context, args: list) -> Expression:
    """Random float in [0, 1)."""
    return random.random()


def rand_int(ctx: Context, args: list) -> Expression:
    """(rand_int lo hi): random integer in [lo, hi); lo when the range is empty."""
    if len(args) != 2 or not all(type(a) is int for a in args):
        return Nil
    lo, hi = args
    if lo >= hi:
        return lo
    return random.randrange(lo, hi)


def _pow(ctx: Context, args: list) -> Expression:
    """(pow base exponent) as a float."""
    if len(args) != 2 or not all(is_number(a) for a in args):
        return Nil
    try:
        return math.pow(*args)
    except (ValueError, OverflowError):
        return math.nan


def exports() -> dict[str, Expression]:
    return {
        "PI": math.pi,
        "E": math.e,
        "TAU": math.tau,
        "INF": math.inf,
        "NAN": math.nan,
        "abs": native(abs_, "abs"),
        "ceil": native(_to_int_fn(math.ceil), "ceil", "Ceiling"),
        "floor": native(_to_int_fn(math.floor), "floor", "Floor"),
        "round": native(_to_int_fn(_round_half_away), "round", "Round to nearest integer, halves away from zero"),
        "sin": native(_float_fn(math.sin), "sin", "Sine"),
        "cos": native(_float_fn(math.cos), "cos", "Cosine"),
        "tan": native(_float_fn(math.tan), "tan", "Tangent"),
        "sqrt": native(_float_fn(math.sqrt), "sqrt", "Square root"),
        "pow": native(_pow, "pow"),
        "min": native(_extreme(lambda a, b: a < b), "min", "Minimum of the numeric arguments"),
        "max": native(_extreme(lambda a, b: a > b), "max", "Maximum of the numeric arguments"),
        "log": native(log),
        "ln": native(_float_fn(math.log), "ln", "Natural logarithm"),
        "log10": native(_float_fn(math.log10), "log10", "Base-10 logarithm"),
        "exp": native(_float_fn(math.exp), "exp", "Exponential e^x"),
        "sign": native(sign),
        "clamp": native(clamp),
        "to_radians": native(_float_fn(math.radians), "to_radians", "Convert degrees to radians"),
        "to_degrees": native(_float_fn(math.degrees), "to_degrees", "Convert radians to degrees"),
        "rand": native(rand),
        "rand_int": native(rand_int),
    }
