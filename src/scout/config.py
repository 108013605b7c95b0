"""
Configuration for Scout.

Settings come from the environment, optionally seeded from a `.env` file.
Real environment variables always win over values in the file.
"""

import os
from pathlib import Path
from typing import Optional, Union

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import InputError
from .imaging.loader import DEFAULT_MAX_IMAGE_PIXELS
from .schemas.base import RedactionMode

ENV_PREFIX = "SCOUT_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ScoutSettings(BaseModel):
    """Runtime settings shared by the facade and the CLI."""

    model_config = ConfigDict(frozen=True)

    redaction_mode: RedactionMode = RedactionMode.STRICT
    max_image_pixels: int = Field(DEFAULT_MAX_IMAGE_PIXELS, gt=0)
    log_level: str = "WARNING"

    @field_validator("redaction_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value):
        return RedactionMode.parse(value)

    @field_validator("log_level", mode="before")
    @classmethod
    def _parse_log_level(cls, value):
        level = str(value or "WARNING").strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_settings(env_file: Optional[Union[str, Path]] = None) -> ScoutSettings:
    """
    Build settings from SCOUT_* environment variables.

    Args:
        env_file: Optional .env path (default: search from the working directory)

    Returns:
        ScoutSettings

    Raises:
        InputError: a variable holds an invalid value
    """
    load_dotenv(dotenv_path=env_file or find_dotenv(usecwd=True), override=False)

    values = {}
    for field_name in ScoutSettings.model_fields:
        raw = os.environ.get(f"{ENV_PREFIX}{field_name.upper()}")
        if raw not in (None, ""):
            values[field_name] = raw

    try:
        return ScoutSettings(**values)
    except (ValidationError, InputError) as e:
        raise InputError(f"Invalid Scout configuration: {e}")


__all__ = ["ENV_PREFIX", "ScoutSettings", "load_settings"]
