from __future__ import annotations

from onion import Expression
from onion.debug_utils.pprint import to_display
from onion.evaluation.native import native
from onion.types.context import Context
from onion.types.expr import ExprList, Vector
from onion.types.nil import Nil

MODULE_NAME = "String"


def _strings(args: list, count: int):
    if len(args) != count or not all(isinstance(a, str) for a in args):
        return None
    return args


def _unary(fn):
    def wrapper(ctx: Context, args: list) -> Expression:
        if len(args) != 1 or not isinstance(args[0], str):
            return Nil
        return fn(args[0])
    wrapper.__doc__ = fn.__doc__
    return wrapper


def _predicate(fn):
    def wrapper(ctx: Context, args: list) -> Expression:
        parsed = _strings(args, 2)
        if parsed is None:
            return Nil
        return 1 if fn(*parsed) else Nil
    return wrapper


def split(ctx: Context, args: list) -> Expression:
    """(split s sep): list of the parts of s between separators."""
    parsed = _strings(args, 2)
    if parsed is None or not parsed[1]:
        return Nil
    s, sep = parsed
    return ExprList(s.split(sep))


def join(ctx: Context, args: list) -> Expression:
    """(join list sep): concatenate the displayed elements with sep between."""
    if len(args) != 2 or not isinstance(args[0], (ExprList, Vector)) or not isinstance(args[1], str):
        return Nil
    return args[1].join(to_display(x) for x in args[0])


def replace(ctx: Context, args: list) -> Expression:
    """(replace s old new): replace every occurrence of old."""
    parsed = _strings(args, 3)
    if parsed is None:
        return Nil
    s, old, new = parsed
    return s.replace(old, new)


def substring(ctx: Context, args: list) -> Expression:
    """(substring s start [length])"""
    if len(args) not in (2, 3) or not isinstance(args[0], str) or type(args[1]) is not int:
        return Nil
    s, start = args[0], max(args[1], 0)
    if start >= len(s):
        return ""
    if len(args) == 3 and type(args[2]) is int:
        return s[start:start + max(args[2], 0)]
    return s[start:]


def repeat(ctx: Context, args: list) -> Expression:
    """(repeat s n): s repeated n times."""
    if len(args) != 2 or not isinstance(args[0], str) or type(args[1]) is not int:
        return Nil
    return args[0] * max(args[1], 0)


def _pad(left: bool):
    def wrapper(ctx: Context, args: list) -> Expression:
        if len(args) not in (2, 3) or not isinstance(args[0], str) or type(args[1]) is not int:
            return Nil
        s, width = args[0], args[1]
        fill = args[2][:1] if len(args) == 3 and isinstance(args[2], str) and args[2] else " "
        return s.rjust(width, fill) if left else s.ljust(width, fill)
    return wrapper


def fmt(ctx: Context, args: list) -> Expression:
    """(fmt template args...): replace each `{}` with the next displayed argument.

    Placeholders without a matching argument are kept as `{}`.
    """
    if not args or not isinstance(args[0], str):
        return Nil
    template, values = args[0], iter(args[1:])
    out: list[str] = []
    i = 0
    while i < len(template):
        if template.startswith("{}", i):
            value = next(values, None)
            out.append("{}" if value is None else to_display(value))
            i += 2
        else:
            out.append(template[i])
            i += 1
    return "".join(out)


def _len(s: str) -> Expression:
    """Number of characters."""
    return len(s)


def _is_empty(s: str) -> Expression:
    return 1 if not s else Nil


def exports() -> dict[str, Expression]:
    return {
        "len": native(_unary(_len), "len"),
        "is_empty": native(_unary(_is_empty), "is_empty", "Is the string empty?"),
        "trim": native(_unary(str.strip), "trim", "Strip surrounding whitespace"),
        "to_upper": native(_unary(str.upper), "to_upper", "To uppercase"),
        "to_lower": native(_unary(str.lower), "to_lower", "To lowercase"),
        "split": native(split),
        "join": native(join),
        "replace": native(replace),
        "substring": native(substring),
        "chars": native(_unary(lambda s: ExprList(s)), "chars", "List of single-character strings"),
        "lines": native(_unary(lambda s: ExprList(s.splitlines())), "lines", "Split into lines"),
        "repeat": native(repeat),
        "pad_left": native(_pad(True), "pad_left", "(pad_left s width [fill])"),
        "pad_right": native(_pad(False), "pad_right", "(pad_right s width [fill])"),
        "starts_with": native(_predicate(str.startswith), "starts_with", "Check prefix"),
        "ends_with": native(_predicate(str.endswith), "ends_with", "Check suffix"),
        "contains": native(_predicate(lambda s, sub: sub in s), "contains", "Check substring"),
        "fmt": native(fmt),
    }
