"""Logging for the ``registrar`` package.

Library modules only call :func:`get_logger` with a ``"registrar.<module>"``
name. The CLI calls :func:`configure_logging` once at startup, which gives
the package logger a single stderr handler so log lines never mix with the
menu output on stdout.
"""

from __future__ import annotations

import logging
import os
import sys

PACKAGE_LOGGER = "registrar"
LEVEL_ENV = "REGISTRAR_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_handler: logging.Handler | None = None


def resolve_level(level: str | None = None) -> int:
    """Map a level name to its number.

    The explicit ``level`` wins, then ``REGISTRAR_LOG_LEVEL``; an empty or
    unknown name means ``INFO``.
    """

    name = (level or os.getenv(LEVEL_ENV) or "").strip().upper()
    value = logging.getLevelNamesMapping().get(name)
    return value if value is not None else logging.INFO


def configure_logging(level: str | None = None) -> logging.Logger:
    """Attach the stderr handler (first call only) and set the level."""

    global _handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None:
        for h in [h for h in logger.handlers if isinstance(h, logging.NullHandler)]:
            logger.removeHandler(h)
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(_handler)
        logger.propagate = False
    logger.setLevel(resolve_level(level))
    return logger


def get_logger(name: str) -> logging.Logger:
    package = logging.getLogger(PACKAGE_LOGGER)
    if _handler is None and not package.handlers:
        package.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "resolve_level"]
