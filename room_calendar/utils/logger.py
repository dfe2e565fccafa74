"""Logging setup for the ``room_calendar`` logger hierarchy."""

from __future__ import annotations

import logging
import sys
from typing import Optional

from room_calendar.utils.config import get_settings


PACKAGE_LOGGER = "room_calendar"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_handler: Optional[logging.Handler] = None


def configure_logging(level: Optional[str] = None) -> str:
    """Attach the stdout handler once and apply ``level`` (settings level by default).

    Later calls with an explicit level only change the level, so the CLI can
    override what module imports already configured.
    """
    global _handler
    package_logger = logging.getLogger(PACKAGE_LOGGER)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(_handler)
    elif level is None:
        return logging.getLevelName(package_logger.level)

    resolved_level = (level or get_settings().log_level).upper()
    package_logger.setLevel(resolved_level)
    return resolved_level


def get_logger(name: str) -> logging.Logger:
    """Return a logger; names outside the package are nested under it."""
    configure_logging()
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)
