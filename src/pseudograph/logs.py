from __future__ import annotations

import logging
from typing import Optional

from .config import AppSettings, get_settings


def configure_logging(settings: Optional[AppSettings] = None) -> None:
    """Apply the configured level and format to the root logger."""
    settings = settings or get_settings()
    level = "DEBUG" if settings.debug else settings.logging.level
    logging.basicConfig(level=level, format=settings.logging.format, force=True)
    logging.getLogger(__name__).debug("Logging configured at level %s", level)
