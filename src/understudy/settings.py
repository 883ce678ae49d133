"""
Runtime settings, read from the environment.

    UNDERSTUDY_LOG_LEVEL           log level for the understudy loggers
    UNDERSTUDY_DIAGNOSTICS_LIMIT   how many armed call sites a miss lists
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

ENV_PREFIX = "UNDERSTUDY_"


class UnderstudySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    log_level: LogLevel = "WARNING"
    diagnostics_limit: int = Field(default=10, ge=0)


def load_settings(environ: Optional[Mapping[str, str]] = None) -> UnderstudySettings:
    """Build settings from environ (defaults to os.environ).

    Raises pydantic.ValidationError on malformed values.
    """
    source = os.environ if environ is None else environ
    values = {}
    for name in UnderstudySettings.model_fields:
        raw = source.get(ENV_PREFIX + name.upper())
        if raw is not None and raw != "":
            values[name] = raw.upper() if name == "log_level" else raw
    return UnderstudySettings(**values)


@lru_cache(maxsize=1)
def get_settings() -> UnderstudySettings:
    return load_settings()
