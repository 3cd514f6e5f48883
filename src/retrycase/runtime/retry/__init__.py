"""Retry with backoff for plain operations and arbitrary callables.

Example:
    >>> from retrycase.runtime.retry import retry_dynamic, retry_exponential
    >>>
    >>> def total(*nums: int) -> tuple[int, Exception | None]:
    ...     return sum(nums), None
    >>> retry_dynamic(2, 0.001, total, 1, 2, 3, 4).unwrap()
    [10]
    >>> retry_exponential(1, 0, lambda: None) is None
    True
"""

from .backoff import (
    Backoff,
    ConstantBackoff,
    ExponentialBackoff,
    FunctionBackoff,
    Jitter,
    LinearBackoff,
    as_backoff,
    get_random,
    reset_random,
    set_random,
    to_seconds,
)
from .descriptor import CallableDescriptor, describe
from .invoker import DynamicCall, retry_dynamic, validate_call
from .loop import retry_exponential, retry_with_backoff
from .policy import RetryPolicy, retrying

__all__ = [
    # Backoff strategies
    "Backoff",
    "ExponentialBackoff",
    "LinearBackoff",
    "ConstantBackoff",
    "FunctionBackoff",
    "as_backoff",
    # Jitter and random source
    "Jitter",
    "get_random",
    "set_random",
    "reset_random",
    "to_seconds",
    # Loop
    "retry_with_backoff",
    "retry_exponential",
    # Dynamic invocation
    "CallableDescriptor",
    "describe",
    "DynamicCall",
    "validate_call",
    "retry_dynamic",
    # Policy
    "RetryPolicy",
    "retrying",
]
