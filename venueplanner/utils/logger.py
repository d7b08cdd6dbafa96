"""Process-wide logging setup."""

import logging
import os
import sys
from typing import Optional


LOG_LEVEL_ENV = "VENUEPLANNER_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_LOGGER_INITIALIZED = False


def configure_logging(level: Optional[str] = None, force: bool = False) -> None:
    """Configure the root logger once per process.

    The level is taken from ``level``, then from the ``VENUEPLANNER_LOG_LEVEL``
    environment variable, then falls back to WARNING. Pass ``force=True`` to
    reconfigure (the CLI does this after parsing ``--log-level``).
    """

    global _LOGGER_INITIALIZED
    if _LOGGER_INITIALIZED and not force:
        return

    resolved_level = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LOG_LEVEL).upper()
    # Unknown names come back as "Level X" strings
    if not isinstance(logging.getLevelName(resolved_level), int):
        resolved_level = DEFAULT_LOG_LEVEL

    logging.basicConfig(
        level=resolved_level,
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=force,
    )
    _LOGGER_INITIALIZED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the requested module."""
    configure_logging()
    return logging.getLogger(name)
