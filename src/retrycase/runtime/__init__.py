"""Runtime layer: the retry loop, backoff strategies and dynamic invocation."""

from .retry import (
    RetryPolicy,
    retry_dynamic,
    retry_exponential,
    retry_with_backoff,
    retrying,
)

__all__ = ["RetryPolicy", "retry_dynamic", "retry_exponential", "retry_with_backoff", "retrying"]
