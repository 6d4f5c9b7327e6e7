"""Logging helpers for gstack.

gstack is a library, so importing it configures nothing beyond a
``NullHandler`` on the ``"gstack"`` logger; records go wherever the
application routes them. Library modules log at DEBUG only: item pushes,
ancestor changes, enumerator exhaustion and detected cycles.
`enable_debug_logging()` is a shortcut for watching those records while
debugging a traversal.
"""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "gstack"

_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Handler installed by enable_debug_logging(), kept so repeated calls reuse it
_debug_handler: Optional[logging.StreamHandler] = None

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the ``"gstack"`` hierarchy.

    Args:
        name: Logger name, normally ``__name__`` of a gstack module.

    Raises:
        ValueError: If `name` is outside the gstack hierarchy.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        raise ValueError(f"Logger name must be under '{PACKAGE_LOGGER}', got '{name}'")
    return logging.getLogger(name)


def set_global_log_level(level: int) -> None:
    """Set the level of the package logger; module loggers inherit it."""
    logging.getLogger(PACKAGE_LOGGER).setLevel(level)


def enable_debug_logging(stream: Optional[TextIO] = None) -> logging.StreamHandler:
    """Send gstack DEBUG records to `stream` (stderr by default).

    Calling it again reuses the installed handler, pointing it at the new
    stream when one is given.

    Returns:
        The handler attached to the package logger.
    """
    global _debug_handler

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _debug_handler is None:
        _debug_handler = logging.StreamHandler(stream or sys.stderr)
        _debug_handler.setFormatter(logging.Formatter(_FORMAT))
        package_logger.addHandler(_debug_handler)
    elif stream is not None:
        _debug_handler.setStream(stream)

    package_logger.setLevel(logging.DEBUG)
    return _debug_handler
