"""
Logging configuration helpers.
Every entry point (API app factory, scripts) calls `configure_logging` once before doing work.
Module loggers are named by area, for example `blog` or `testimonial`, so log lines are easy to filter.
"""

from __future__ import annotations

import logging

from clinic_site.common.settings import get_settings

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from environment settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    settings = get_settings()
    level_name = settings.LOG_LEVEL.upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
