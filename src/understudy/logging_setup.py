"""Console logging for the understudy loggers.

Installs a stream handler on the "understudy" logger once; does nothing if
the root logger or the package logger already has handlers, so host test
suites keep control of their own output.
"""
from __future__ import annotations

import logging
from logging.config import dictConfig
from typing import Optional

from .settings import get_settings


def _dict_config(level: str) -> dict:
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s:%(name)s:%(message)s",
            }
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level,
                "formatter": "default",
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            "understudy": {"level": level, "handlers": ["console"], "propagate": False},
        },
    }


def configure_logging(level: Optional[str] = None) -> None:
    if logging.getLogger().handlers or logging.getLogger("understudy").handlers:
        return
    dictConfig(_dict_config(level or get_settings().log_level))
