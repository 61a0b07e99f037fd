# src/perimeter/config/settings.py
"""
Runtime settings for Perimeter.

Resolution order: explicit overrides > environment variables > defaults.

Environment variables:
    PERIMETER_LOG_LEVEL      log level used by configure_logging() (default WARNING)
    PERIMETER_ON_DUPLICATE   default duplicate-contract policy: error | replace
"""

from __future__ import annotations

import logging
import os
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

ENV_LOG_LEVEL = "PERIMETER_LOG_LEVEL"
ENV_ON_DUPLICATE = "PERIMETER_ON_DUPLICATE"


class PerimeterSettings(BaseModel):
    log_level: str = Field("WARNING", description="Level for the perimeter logger.")
    on_duplicate: Literal["error", "replace"] = Field(
        "error", description="Policy when a contract name is registered twice."
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{v}'")
        return level

    @field_validator("on_duplicate", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v


def load_settings(**overrides: Any) -> PerimeterSettings:
    """Build settings from the environment, then apply keyword overrides."""
    values: dict = {}
    if os.getenv(ENV_LOG_LEVEL):
        values["log_level"] = os.environ[ENV_LOG_LEVEL]
    if os.getenv(ENV_ON_DUPLICATE):
        values["on_duplicate"] = os.environ[ENV_ON_DUPLICATE]
    values.update({k: v for k, v in overrides.items() if v is not None})
    return PerimeterSettings(**values)
