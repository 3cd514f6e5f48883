"""Foundation layer: errors, results and configuration."""

from .config import RetrycaseSettings, clear_settings_cache, configure_logging, get_settings
from .errors import ErrorCode, Err, Ok, Result, RetryError, RetryException

__all__ = [
    "ErrorCode", "RetryError", "RetryException", "Result", "Ok", "Err",
    "RetrycaseSettings", "get_settings", "clear_settings_cache", "configure_logging",
]
