"""
Structured logging helpers for ethtx.

Every module obtains its logger through ``get_logger(__name__)`` so the
whole package hangs off the ``ethtx`` logger. The library only installs a
``NullHandler``; applications opt in with ``configure_logging()``.

Context is passed with ``extra={...}`` and rendered by ``StructuredFormatter``
as trailing ``key=value`` pairs:

    _logger.info("Transaction broadcast", extra={"tx_hash": tx_hash})
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

ROOT_LOGGER_NAME = "ethtx"
DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attributes every LogRecord carries; anything else came in through `extra`.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None)).keys()
) | {"message", "asctime"}

logging.getLogger(ROOT_LOGGER_NAME).addHandler(logging.NullHandler())


class StructuredFormatter(logging.Formatter):
    """Formatter that appends ``extra`` fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)
        extras = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RESERVED_ATTRS and not key.startswith("_")
        }
        if not extras:
            return base
        rendered = " ".join(f"{key}={value}" for key, value in sorted(extras.items()))
        return f"{base} | {rendered}"


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger inside the ``ethtx`` namespace.

    Args:
        name: Usually ``__name__`` of the calling module

    Returns:
        Logger named ``name`` if it already lives under ``ethtx``,
        otherwise ``ethtx.<name>``
    """
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Attach a stream handler with ``StructuredFormatter`` to the ``ethtx`` logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Logging level for the package
        fmt: Format string passed to the formatter
        stream: Output stream (defaults to stderr)

    Returns:
        The configured ``ethtx`` logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_ethtx_handler", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(StructuredFormatter(fmt))
    handler._ethtx_handler = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    logger.setLevel(level)
    return logger


def set_level(level: int) -> None:
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)


def disable_logging() -> None:
    """Silence every logger in the package, child loggers included."""
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(logging.CRITICAL + 1)


def enable_debug() -> None:
    """Shortcut for ``configure_logging(logging.DEBUG)``."""
    configure_logging(logging.DEBUG)
