"""Logging configuration for the ``rapprochement`` package.

Library modules only call ``logging.getLogger(__name__)``; the CLI entry
point calls ``configure_logging`` once at startup.
"""

import logging
import os
from logging.config import dictConfig
from typing import Optional, Union

PACKAGE_LOGGER = "rapprochement"
LOG_LEVEL_ENV = "RAPPROCHEMENT_LOG_LEVEL"


def parse_level(level: Optional[Union[int, str]]) -> int:
    """Turn a level name or number into a logging level, WARNING by default."""
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV)
    if level is None:
        return logging.WARNING
    if isinstance(level, int):
        return level
    level = level.strip().upper()
    if level.isdigit():
        return int(level)
    numeric = logging.getLevelName(level)
    if not isinstance(numeric, int):
        raise ValueError(f"Unknown log level '{level}'")
    return numeric


def configure_logging(level: Optional[Union[int, str]] = None) -> None:
    """Send package logs to stderr at the given level."""
    numeric = parse_level(level)
    dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"}
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "standard",
                    "level": numeric,
                    "stream": "ext://sys.stderr",
                }
            },
            "loggers": {
                PACKAGE_LOGGER: {
                    "handlers": ["console"],
                    "level": numeric,
                },
            },
        }
    )
