"""Command line driver: `onion FILE`, `onion -e EXPR`, or a program on stdin."""
from __future__ import annotations

import argparse
import sys
import traceback
from typing import Optional, Sequence

from onion import __version__
from onion.config import backtrace_enabled
from onion.debug_utils.pprint import to_display
from onion.errors import OnionParseError, OnionRuntimeError
from onion.interpreter import Interpreter
from onion.logging_config import get_logger, setup_logging
from onion.stack import run_with_large_stack

logger = get_logger("onion")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="onion", description="Onion language interpreter")
    parser.add_argument("file", nargs="?", metavar="FILE", help="file to execute")
    parser.add_argument("-e", "--eval", metavar="EXPR", help="evaluate an expression and print the result")
    parser.add_argument("-d", "--debug", action="store_true", help="log parsed statements and the final result")
    parser.add_argument(
        "--stack-size",
        type=int,
        metavar="MB",
        help="run on a thread with an enlarged stack of MB megabytes",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _read_source(args: argparse.Namespace) -> str:
    if args.eval is not None:
        return args.eval
    if args.file:
        with open(args.file, encoding="utf-8") as f:
            return f.read()
    return sys.stdin.read()


def run(source: str, print_result: bool, debug: bool) -> int:
    interp = Interpreter()
    try:
        result = interp.eval(source)
    except OnionParseError as e:
        print(e.render(), file=sys.stderr)
        return 1
    except (OnionRuntimeError, RecursionError) as e:
        if backtrace_enabled():
            logger.error("Runtime Error: %s\n%s", e, traceback.format_exc())
        else:
            logger.error("Runtime Error: %s", e)
        return 1
    if print_result:
        print(to_display(result))
    elif debug:
        logger.debug("Final result: %s", to_display(result))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.debug else None)
    try:
        source = _read_source(args)
    except OSError as e:
        logger.error("Error reading file '%s': %s", args.file, e)
        return 1

    print_result = args.eval is not None
    if args.stack_size:
        return run_with_large_stack(run, source, print_result, args.debug, stack_size_mb=args.stack_size)
    return run(source, print_result, args.debug)


if __name__ == "__main__":
    sys.exit(main())
