"""Configuration management using pydantic-settings."""

from .settings import (
    LoggingSettings,
    RetrySettings,
    RetrycaseSettings,
    clear_settings_cache,
    configure_logging,
    get_settings,
)

__all__ = [
    "LoggingSettings",
    "RetrySettings",
    "RetrycaseSettings",
    "clear_settings_cache",
    "configure_logging",
    "get_settings",
]
