from __future__ import annotations

import logging
import os
from logging import Logger
from logging.config import dictConfig
from typing import Any


def _default_logging_dict(level: str) -> dict[str, Any]:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)-8s %(name)s - %(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": "DEBUG",
                "formatter": "default",
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            # requests' connection pool is chatty at DEBUG
            "urllib3": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }


def configure_logging(level_name: str | int | None = None) -> None:
    """Configure console logging for applications using the client.

    - A string like 'DEBUG' is resolved to the numeric level.
    - If None, the `LOG_LEVEL` env var is used, otherwise INFO.
    The handler accepts everything; the root logger controls what is shown.
    The library itself never calls this.
    """
    if level_name is None:
        level_name = os.getenv("LOG_LEVEL", "INFO")

    if isinstance(level_name, str):
        level_name = level_name.upper()
        level = getattr(logging, level_name, logging.INFO)
    else:
        level = level_name

    dictConfig(_default_logging_dict(logging.getLevelName(level)))
    logging.getLogger().setLevel(level)


def get_logger(name: str) -> Logger:
    """Return a module logger by name, as in `logger = get_logger(__name__)`."""
    return logging.getLogger(name)
