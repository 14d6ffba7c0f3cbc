"""
bunnyfont.log - Logging module with proper Python exception handling.

Usage:
    from bunnyfont import log

    log.info("Hello")
    log.warn("Something wrong")

    try:
        font = load_font(path, (8, 8))
    except OSError as e:
        log.error(e, "Failed to load font")  # includes traceback
"""

from __future__ import annotations

import logging
import traceback
from enum import IntEnum
from typing import Callable, Optional

_logger = logging.getLogger("bunnyfont")


class Level(IntEnum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARN = logging.WARNING
    ERROR = logging.ERROR


_callback: Optional[Callable[[int, str], None]] = None


def debug(msg_or_exc, context: str = ""):
    """Log debug message or exception with context."""
    _emit(logging.DEBUG, msg_or_exc, context)


def info(msg_or_exc, context: str = ""):
    """Log info message or exception with context."""
    _emit(logging.INFO, msg_or_exc, context)


def warn(msg_or_exc, context: str = ""):
    """Log warning message or exception with context."""
    _emit(logging.WARNING, msg_or_exc, context)


def warning(msg_or_exc, context: str = ""):
    """Alias for warn()."""
    warn(msg_or_exc, context)


def error(msg_or_exc, context: str = ""):
    """Log error message or exception with context."""
    _emit(logging.ERROR, msg_or_exc, context)


def exception(msg: str = ""):
    """Log error with current exception traceback."""
    text = f"{msg}\n{traceback.format_exc()}" if msg else traceback.format_exc()
    _write(logging.ERROR, text)


def set_level(level: int) -> None:
    """Set minimal level of messages passed to handlers."""
    _logger.setLevel(level)


def set_callback(callback: Optional[Callable[[int, str], None]]) -> None:
    """
    Route every emitted message to ``callback(level, text)``.

    Passing None restores plain ``logging`` output.
    """
    global _callback
    _callback = callback


def _emit(level: int, msg_or_exc, context: str):
    if isinstance(msg_or_exc, BaseException):
        _write(level, _format_exception(msg_or_exc, context))
    elif context:
        _write(level, f"{context}: {msg_or_exc}")
    else:
        _write(level, str(msg_or_exc))


def _write(level: int, text: str):
    if _callback is not None:
        if _logger.isEnabledFor(level):
            _callback(level, text)
        return
    _logger.log(level, text)


def _format_exception(exc: BaseException, context: str) -> str:
    """Format exception with traceback."""
    exc_type = type(exc).__name__
    exc_msg = str(exc)

    tb = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))

    if context:
        return f"{context}: {exc_type}: {exc_msg}\n{tb}"
    return f"{exc_type}: {exc_msg}\n{tb}"
