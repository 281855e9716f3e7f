"""Run a callable on a thread with an enlarged host stack.

The evaluator recurses on the host stack for non-tail calls and nested
arguments. Deep programs can opt into a bigger stack and a matching Python
recursion limit instead of failing with RecursionError.
"""
from __future__ import annotations

import sys
import threading
from typing import Any, Callable, Optional

from onion.config import get_recursion_limit, get_stack_size_mb
from onion.logging_config import get_logger

logger = get_logger(__name__)


def run_with_large_stack(
    fn: Callable[..., Any],
    *args: Any,
    stack_size_mb: Optional[int] = None,
    recursion_limit: Optional[int] = None,
) -> Any:
    """Call `fn(*args)` on a worker thread and return its result.

    Exceptions raised by `fn` are re-raised in the caller. The previous
    thread stack size and recursion limit are restored afterwards.
    """
    size_mb = stack_size_mb if stack_size_mb is not None else get_stack_size_mb()
    limit = recursion_limit if recursion_limit is not None else get_recursion_limit()
    outcome: dict[str, Any] = {}

    def target() -> None:
        try:
            outcome["value"] = fn(*args)
        except BaseException as exc:  # re-raised on the calling thread
            outcome["error"] = exc

    old_size = threading.stack_size()
    old_limit = sys.getrecursionlimit()
    logger.debug("Running with %d MB stack, recursion limit %d", size_mb, limit)
    threading.stack_size(size_mb * 1024 * 1024)
    sys.setrecursionlimit(max(limit, old_limit))
    try:
        worker = threading.Thread(target=target, name="onion-eval")
        worker.start()
        worker.join()
    finally:
        threading.stack_size(old_size)
        sys.setrecursionlimit(old_limit)

    if "error" in outcome:
        raise outcome["error"]
    return outcome.get("value")
