"""
structdiff.config — Settings read from the environment.

    STRUCTDIFF_VERBOSE=1          log the first divergence of every equality check
    STRUCTDIFF_TRACE_LEVEL=INFO   level used for those records
    STRUCTDIFF_MAX_DEPTH=500      refuse to recurse deeper than this
"""

import logging
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings with environment variable support."""

    # Route first-divergence traces to logging when no sink is given
    verbose: bool = False
    trace_level: str = "DEBUG"

    # Recursion guard for equal() and object numeric diffs (None = off)
    max_depth: Optional[int] = None

    model_config = SettingsConfigDict(
        env_prefix="STRUCTDIFF_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("trace_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown logging level: {value}")
        return value

    @field_validator("max_depth")
    @classmethod
    def _positive_depth(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("max_depth must be at least 1")
        return value


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    global _settings
    _settings = None
