"""
utils/logger.py
---------------
Centralized logging configuration.
All modules should use `get_logger(__name__)` to obtain a logger instance.
The level comes from LOG_LEVEL unless `configure_logging()` is called first.
"""

import logging
import sys
from typing import Optional, TextIO

from config import LOG_LEVEL

_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_handler: Optional[logging.Handler] = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(level: str = LOG_LEVEL, stream: TextIO = sys.stdout) -> None:
    """
    Attach the application handler to the root logger and set its level.

    Calling it again swaps the stream and level instead of stacking handlers.
    Unknown level names fall back to INFO.
    """
    global _handler
    root = logging.getLogger()
    if _handler is not None:
        root.removeHandler(_handler)
    _handler = logging.StreamHandler(stream)
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT, _DATE_FORMAT))
    root.addHandler(_handler)
    root.setLevel(_level_from_name(level))


def get_logger(name: str) -> logging.Logger:
    """Named logger; configures logging on first use."""
    if _handler is None:
        configure_logging()
    return logging.getLogger(name)
