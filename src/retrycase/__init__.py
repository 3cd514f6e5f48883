"""Retrycase - retry with backoff for any Python callable.

Three entry points, from lowest to highest level:

    >>> from retrycase import retry_with_backoff, retry_exponential, retry_dynamic
    >>>
    >>> # Zero-argument operation, custom strategy: return None on success
    >>> err = retry_with_backoff(3, 0.1, lambda d: d * 3, ping)
    >>>
    >>> # Same, with jittered exponential backoff
    >>> err = retry_exponential(5, 0.05, ping)
    >>>
    >>> # Any callable: the last return value is the error slot
    >>> def div(a: float, b: float) -> tuple[float, ZeroDivisionError | None]:
    ...     return (0.0, ZeroDivisionError("Can not divide by zero")) if b == 0 else (a / b, None)
    >>> values, err = retry_dynamic(2, 0.001, div, 9.0, 3.0).to_tuple()
    >>> values
    [3.0]

Failures are values: RetryError carries an ErrorCode and the last cause.
Configuration comes from RETRYCASE_ environment variables (see
retrycase.foundation.config).
"""

from __future__ import annotations

__version__ = "0.1.0"

from .foundation import (
    ErrorCode,
    Err,
    Ok,
    Result,
    RetrycaseSettings,
    RetryError,
    RetryException,
    clear_settings_cache,
    configure_logging,
    get_settings,
)
from .runtime.retry import (
    Backoff,
    ConstantBackoff,
    ExponentialBackoff,
    FunctionBackoff,
    Jitter,
    LinearBackoff,
    RetryPolicy,
    get_random,
    reset_random,
    retry_dynamic,
    retry_exponential,
    retry_with_backoff,
    retrying,
    set_random,
)

__all__ = [
    "__version__",
    # Entry points
    "retry_with_backoff", "retry_exponential", "retry_dynamic", "retrying", "RetryPolicy",
    # Strategies
    "Backoff", "ExponentialBackoff", "LinearBackoff", "ConstantBackoff", "FunctionBackoff", "Jitter",
    "get_random", "set_random", "reset_random",
    # Errors
    "ErrorCode", "RetryError", "RetryException", "Result", "Ok", "Err",
    # Config
    "RetrycaseSettings", "get_settings", "clear_settings_cache", "configure_logging",
]
