"""Logging configuration for the interpreter and its driver."""
import logging
import os
import sys
from typing import Optional

from onion.config import get_log_level


def setup_logging(level: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """
    Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Defaults
            to ONION_LOG_LEVEL.
        log_file: Optional path to log file. If None, logs to stderr so that
            program output on stdout stays clean.
    """
    level = (level or get_log_level()).upper()
    numeric_level = getattr(logging, level, logging.WARNING)

    config = {
        'level': numeric_level,
        'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    }

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir and not os.path.exists(log_dir):
            os.makedirs(log_dir)
        config['filename'] = log_file
    else:
        config['stream'] = sys.stderr

    logging.basicConfig(**config)
    logging.getLogger(__name__).debug("Logging initialized at %s level", level)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name.

    Args:
        name: Logger name, typically __name__ from the calling module

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
