from __future__ import annotations
import os

# Defaults
_DEFAULT_LOG_LEVEL = "WARNING"
_DEFAULT_STACK_SIZE_MB = 256
_DEFAULT_RECURSION_LIMIT = 200_000

_TRUTHY = {"1", "true", "yes", "on", "full"}


def _int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def get_log_level() -> str:
    return os.environ.get("ONION_LOG_LEVEL", _DEFAULT_LOG_LEVEL).upper()


def backtrace_enabled() -> bool:
    # Mirrors the RUST_BACKTRACE convention: any truthy value enables it
    return os.environ.get("ONION_BACKTRACE", "").strip().lower() in _TRUTHY


def get_stack_size_mb() -> int:
    return _int_from_env("ONION_STACK_SIZE_MB", _DEFAULT_STACK_SIZE_MB)


def get_recursion_limit() -> int:
    return _int_from_env("ONION_RECURSION_LIMIT", _DEFAULT_RECURSION_LIMIT)
