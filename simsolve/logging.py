"""Logging utilities for simsolve.

Every module obtains its logger through :func:`get_logger` so that all
package loggers share one format and can be reconfigured together.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

_DEFAULT_LEVEL = logging.WARNING
_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Get or create a logger for the given module name.

    Loggers are cached so that repeated calls never stack handlers.

    Args:
        name: Logger name, typically ``__name__``. ``None`` returns the
            package logger.

    Returns:
        A logger named ``simsolve.<name>`` (or ``name`` itself when it already
        carries the prefix).

    Example:
        >>> from simsolve.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("bracket ordered")
    """
    if name is None:
        name = "simsolve"
    if name == "simsolve" or name.startswith("simsolve."):
        logger_name = name
    else:
        logger_name = f"simsolve.{name}"

    if logger_name in _loggers:
        return _loggers[logger_name]

    logger = logging.getLogger(logger_name)
    if not logger.handlers:
        logger.setLevel(_DEFAULT_LEVEL)
        handler = logging.StreamHandler(sys.stderr)
        handler.setLevel(_DEFAULT_LEVEL)
        handler.setFormatter(logging.Formatter(_DEFAULT_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False

    _loggers[logger_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every simsolve logger, existing and future.

    Args:
        level: A ``logging`` level constant or its name (``"DEBUG"``, ...).
            Unknown names fall back to WARNING.
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _DEFAULT_LEVEL = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Replace the handlers of all cached simsolve loggers.

    Call once at application start-up, e.g. to trace solver iterations::

        configure_logging(level="DEBUG")

    Args:
        level: Logging level (default: WARNING).
        format_string: Record format; defaults to ``[LEVEL] name: message``.
        stream: Destination stream (default: ``sys.stderr``).
    """
    global _DEFAULT_LEVEL
    level = _coerce_level(level)
    formatter = logging.Formatter(format_string or _DEFAULT_FORMAT)
    target = stream if stream is not None else sys.stderr

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers[:]:
            logger.removeHandler(handler)
        handler = logging.StreamHandler(target)
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    _DEFAULT_LEVEL = level


__all__ = ["configure_logging", "get_logger", "set_log_level"]
