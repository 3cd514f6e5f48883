"""The retry loop: invoke, check, pause, advance the delay, repeat.

Operations take no arguments and report their outcome through the return
value: None (or Ok) means success, an exception instance, Err or RetryError
means failure. Raised exceptions count as failures too.

At least once: the loop always makes one attempt, even when the budget it
is given is zero or negative.
"""

from __future__ import annotations

import logging
import random
import time
from typing import Callable

from retrycase.foundation.errors import ErrorCode, Result, RetryError

from .backoff import Backoff, Delay, Jitter, as_backoff, default_backoff, default_jitter, to_seconds

logger = logging.getLogger("retrycase.retry")

Operation = Callable[[], object]
Sleeper = Callable[[float], None]
OnRetry = Callable[[int, RetryError, float], None]


def failure_of(outcome: object, attempt: int) -> RetryError | None:
    """Classify an operation's return value; None means success."""
    if outcome is None:
        return None
    if isinstance(outcome, RetryError):
        return outcome if outcome.attempts else outcome.with_attempts(attempt)
    if isinstance(outcome, Result):
        if outcome.is_ok():
            return None
        cause = outcome.unwrap_err()
        if isinstance(cause, RetryError):
            return failure_of(cause, attempt)
        return RetryError.from_cause(cause, attempts=attempt)
    if isinstance(outcome, BaseException):
        return RetryError.from_cause(outcome, attempts=attempt)
    return RetryError(
        code=ErrorCode.INVALID_ERROR_SENTINEL,
        message=f"operation must return None or an error, got {type(outcome).__name__}",
        attempts=attempt,
    )


def retry_with_backoff(
    attempts: int,
    initial_delay: Delay,
    backoff: Backoff | Callable[[float], float],
    operation: Operation,
    *,
    jitter: Jitter | None = None,
    sleeper: Sleeper | None = None,
    on_retry: OnRetry | None = None,
) -> RetryError | None:
    """Run operation until it succeeds or the attempt budget runs out.

    Between failed attempts the loop pauses for the current delay (stretched by
    jitter when given), then asks the strategy for the next delay. Nothing is
    computed or slept after a success or after the last permitted attempt, so
    the strategy runs exactly ``invocations - 1`` times.

    Args:
        attempts: Attempt budget; values below 1 still allow one attempt
        initial_delay: Pause before the second attempt, seconds or timedelta
        backoff: Strategy or plain ``current -> next`` function
        operation: Zero-argument callable reporting its outcome by return value
        jitter: Optional randomization applied to each pause
        sleeper: Blocking sleep function (default: time.sleep)
        on_retry: Callback ``(attempt, error, pause)`` before each pause

    Returns:
        None on success, otherwise the last RetryError. A non-recoverable error
        returned by the operation stops the loop immediately.
    """
    strategy = as_backoff(backoff)
    sleep = sleeper or time.sleep
    remaining = max(attempts, 1)
    delay = max(to_seconds(initial_delay), 0.0)
    attempt = 0

    while True:
        attempt += 1
        try:
            outcome = operation()
        except Exception as e:
            outcome = e
        error = failure_of(outcome, attempt)
        remaining -= 1
        if error is None:
            return None
        if remaining == 0 or not error.recoverable:
            logger.debug(f"Giving up after {attempt} attempt(s): {error.message} [{error.code}]")
            return error

        pause = jitter.apply(delay) if jitter else delay
        logger.debug(f"Attempt {attempt} failed ({error.message}), {remaining} left, retrying in {pause:.3f}s")
        if on_retry:
            on_retry(attempt, error, pause)
        if pause > 0:
            sleep(pause)
        delay = max(strategy.next_delay(pause), 0.0)


def retry_exponential(
    attempts: int,
    initial_delay: Delay,
    operation: Operation,
    *,
    sleeper: Sleeper | None = None,
    rng: random.Random | None = None,
) -> RetryError | None:
    """retry_with_backoff bound to jittered exponential backoff.

    With default settings each pause is ``delay + uniform(0, delay) / 2`` and the
    next delay is twice that pause. A zero initial delay never pauses.
    """
    return retry_with_backoff(
        attempts, initial_delay, default_backoff(), operation,
        jitter=default_jitter(rng), sleeper=sleeper,
    )
