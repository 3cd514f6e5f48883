"""Environment-based configuration using pydantic-settings.

Example:
    >>> from retrycase.foundation.config import get_settings
    >>> get_settings().retry.multiplier
    2.0

    # Or with environment variables:
    # RETRYCASE_RETRY__ATTEMPTS=5
    # RETRYCASE_RETRY__SEED=42
    # RETRYCASE_LOG__LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, NonNegativeFloat, PositiveFloat, PositiveInt
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrySettings(BaseSettings):
    """Defaults for the exponential retry entry points."""

    model_config = SettingsConfigDict(env_prefix="RETRYCASE_RETRY_", extra="ignore")

    attempts: PositiveInt = 3
    initial_delay: NonNegativeFloat = Field(default=0.1, description="Seed delay in seconds")
    multiplier: PositiveFloat = Field(default=2.0, description="Growth factor applied after each pause")
    max_delay: PositiveFloat | None = Field(default=None, description="Cap on the delay between attempts")
    jitter: bool = True
    jitter_ratio: Annotated[float, Field(ge=0.0, le=1.0)] = 0.5
    seed: int | None = Field(default=None, description="Seed for the shared random source")


class LoggingSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RETRYCASE_LOG_", extra="ignore")

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"


class RetrycaseSettings(BaseSettings):
    """Root settings, loaded from RETRYCASE_ environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="RETRYCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    retry: RetrySettings = Field(default_factory=RetrySettings)
    log: LoggingSettings = Field(default_factory=LoggingSettings)


@lru_cache(maxsize=1)
def get_settings() -> RetrycaseSettings:
    """Get the global settings instance (cached)."""
    return RetrycaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()


def configure_logging(level: str | None = None) -> logging.Logger:
    """Apply the configured level to the package logger.

    The library installs no handlers; this only sets the threshold.
    """
    logger = logging.getLogger("retrycase")
    logger.setLevel(level or get_settings().log.level)
    return logger
