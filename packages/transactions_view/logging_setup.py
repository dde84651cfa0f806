"""Logging configuration for the ``transactions_view`` package.

Two helpers make up the public surface:

- ``configure_logging(...)``: install one ``StreamHandler`` on the package
  logger (``"transactions_view"``). Entrypoints (the CLI, the interactive
  browser) call it once at startup; later calls are ignored.
- ``get_logger(name)``: return a named logger for library modules. Until an
  entrypoint configures output, the package logger carries a ``NullHandler`` so
  embedding applications see nothing unless they opt in.

Library modules only ever call ``get_logger("transactions_view.<module>")``.
They never add handlers of their own.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "transactions_view"
LEVEL_ENV_VAR = "TXN_VIEW_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"

_configured_handler: logging.Handler | None = None


def resolve_level(level: int | str | None) -> int:
    """Translate ``level`` into a numeric logging level.

    Accepts ints, numeric strings and level names (case-insensitive). When
    ``level`` is ``None`` the ``TXN_VIEW_LOG_LEVEL`` environment variable is
    consulted; anything unrecognised falls back to ``logging.INFO``.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR)
    if isinstance(level, int):
        return level
    if isinstance(level, str) and level.strip():
        name = level.strip().upper()
        if name.isdigit():
            return int(name)
        numeric = logging.getLevelNamesMapping().get(name)
        if numeric is not None:
            return numeric
    return logging.INFO


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] = sys.stderr,
) -> logging.Logger:
    """Attach a single stream handler to the package logger.

    Parameters
    ----------
    level:
        Level as ``int`` or name. ``None`` defers to ``TXN_VIEW_LOG_LEVEL``,
        then ``INFO``.
    fmt:
        Optional format string; defaults to :data:`DEFAULT_FORMAT`.
    stream:
        Destination of the handler (``sys.stderr`` by default so table output
        on stdout stays clean).
    """

    global _configured_handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _configured_handler is not None:
        return logger

    for existing in list(logger.handlers):
        if isinstance(existing, logging.NullHandler):
            logger.removeHandler(existing)

    numeric = resolve_level(level)
    handler = logging.StreamHandler(stream)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    _configured_handler = handler
    return logger


def reset_logging() -> None:
    """Undo :func:`configure_logging` (used by tests and long-lived hosts)."""

    global _configured_handler
    logger = logging.getLogger(PACKAGE_LOGGER)
    if _configured_handler is not None:
        logger.removeHandler(_configured_handler)
        _configured_handler = None
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    """Return ``logging.getLogger(name)`` with a silent default for the package."""

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)
    if _configured_handler is None and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging", "resolve_level"]
