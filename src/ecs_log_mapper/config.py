"""Application configuration management using Pydantic Settings.

This module defines the `Settings` class, which loads configuration parameters
from environment variables and a `.env` file. It centralizes the tunable
parameters of the ECS output: timestamp format, message length limit, JSON
encoding and the CLI logging level.

The `get_settings` function provides a cached, singleton instance of the
configuration, ensuring consistent settings throughout the application.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict as _SettingsConfigDict

from .mapping.time_utils import ECS_TIMESTAMP_FORMAT


class Settings(BaseSettings):
    """Defines all application configuration parameters.

    Values come from environment variables or a `.env` file. Explicit
    arguments to `EcsMapper`/`EcsDevice` always win over these; the settings
    are read by the CLI and by `EcsDevice.from_settings`.
    """

    model_config = _SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Logging & runtime behavior
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # ECS document shape
    ECS_DATETIME_FORMAT: str = Field(
        default=ECS_TIMESTAMP_FORMAT,
        description=(
            "strftime format for @timestamp; %<n>N emits n fractional digits. "
            "A literal Z enables UTC conversion."
        ),
    )
    # NOTE: 0 keeps messages intact; truncation is opt-in
    ECS_MAX_MESSAGE_LENGTH: int = Field(
        default=0,
        description="Max characters for string messages before truncation (0 = disabled)",
    )
    ECS_ENSURE_ASCII: bool = Field(
        default=False,
        description="Escape non-ASCII characters in the emitted JSON",
    )

    @field_validator("ECS_MAX_MESSAGE_LENGTH", mode="before")
    @classmethod
    def blank_length_to_zero(cls, v: Any) -> Any:
        """Treat a blank env value as 'disabled' instead of a validation error."""
        if isinstance(v, str) and not v.strip():
            return 0
        return v

    @field_validator("ECS_MAX_MESSAGE_LENGTH")
    @classmethod
    def non_negative_length(cls, v: int) -> int:
        if v < 0:
            raise ValueError("ECS_MAX_MESSAGE_LENGTH must be >= 0")
        return v

    @property
    def max_message_length(self) -> Optional[int]:
        """Message limit as understood by the mapper (None when disabled)."""
        return self.ECS_MAX_MESSAGE_LENGTH or None


@lru_cache(maxsize=1)
def get_settings() -> Settings:  # pragma: no cover - trivial
    """Return a cached, singleton instance of the application settings."""
    return Settings()
