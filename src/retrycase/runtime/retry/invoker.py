"""Dynamic invocation: retry any callable without writing an adapter.

The callable's trailing return value decides the outcome:

    >>> def div(a: float, b: float) -> tuple[float, ZeroDivisionError | None]:
    ...     return (0.0, ZeroDivisionError("Can not divide by zero")) if b == 0 else (a / b, None)
    >>> retry_dynamic(2, 0.001, div, 9.0, 3.0).to_tuple()
    ([3.0], None)

- ``None`` trailing: success, the preceding values are the payload
- exception instance trailing, or a raised exception: failure, retried
- ``Ok(v)`` / ``Err(e)`` return: success with ``[v]`` / failure with cause ``e``
- anything else trailing: malformed convention, reported without retrying

Callables whose return is declared (or observed as a single value) not to be
error-shaped run exactly once and their values come back verbatim, unless
the trailing value turns out to be an exception after all.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Any, Callable

from retrycase.foundation.errors import ErrorCode, Err, Ok, Result, RetryError

from .backoff import Backoff, Delay, Jitter, default_backoff, default_jitter, to_seconds
from .descriptor import CallableDescriptor, describe
from .loop import OnRetry, Sleeper, retry_with_backoff

logger = logging.getLogger("retrycase.invoker")


def _name(fn: Any) -> str:
    return getattr(fn, "__qualname__", None) or type(fn).__name__


def _reject(code: ErrorCode, message: str) -> Result[CallableDescriptor, RetryError]:
    logger.debug(f"Rejected before first attempt: {message} [{code}]")
    return Err(RetryError.create(code, message))


def validate_call(
    attempts: int,
    initial_delay: Delay,
    fn: Any,
    args: tuple[Any, ...],
    *,
    require_error_return: bool = False,
) -> Result[CallableDescriptor, RetryError]:
    """Check a dynamic call once, before any invocation.

    Returns the callable's descriptor, or the first structural error found.
    """
    if attempts < 1:
        return _reject(ErrorCode.INVALID_ATTEMPT_BUDGET, f"attempt should be greater than 0, got {attempts}")
    if not callable(fn):
        return _reject(ErrorCode.NOT_CALLABLE, f"fn is not a function: {type(fn).__name__!r} object")
    if to_seconds(initial_delay) < 0:
        return _reject(ErrorCode.INVALID_DELAY, f"initial delay must not be negative, got {initial_delay}")

    desc = describe(fn)
    if not desc.accepts(args):
        return _reject(
            ErrorCode.ARGUMENT_COUNT_MISMATCH,
            f"{_name(fn)} takes {desc.expected()} positional argument(s), got {len(args)}",
        )
    if desc.return_arity == 0:
        return _reject(ErrorCode.NO_RETURN_VALUES, f"{_name(fn)} returns nothing, at least an error is required")
    if require_error_return and desc.error_return is False:
        return _reject(ErrorCode.NO_ERROR_RETURN, f"{_name(fn)} does not declare an error as its last return value")
    return Ok(desc)


class DynamicCall:
    """Zero-argument adapter around fn(*args) that the retry loop drives.

    Each invocation translates fn's return value into the loop's convention
    and keeps the success payload in ``payload``.
    """

    __slots__ = ("fn", "args", "descriptor", "require_error_return", "payload")

    def __init__(
        self, fn: Callable[..., Any], args: tuple[Any, ...], descriptor: CallableDescriptor,
        *, require_error_return: bool = False,
    ) -> None:
        self.fn, self.args, self.descriptor = fn, args, descriptor
        self.require_error_return = require_error_return
        self.payload: list[Any] = []

    @property
    def single_shot(self) -> bool:
        """Declared non-error return: outcome of the first call is final."""
        return self.descriptor.error_return is False

    def _unpack(self, out: Any) -> tuple[Any, ...]:
        if isinstance(out, tuple) and self.descriptor.return_arity != 1:
            return out
        return (out,)

    def __call__(self) -> object:
        out = self.fn(*self.args)
        if isinstance(out, Result):
            if out.is_ok():
                self.payload = [out.unwrap()]
                return None
            return out

        values = self._unpack(out)
        if not values:
            return RetryError.create(ErrorCode.NO_RETURN_VALUES, f"{_name(self.fn)} returned no values")
        last = values[-1]
        if isinstance(last, BaseException):
            return last
        if self.single_shot:
            self.payload = list(values)
            return None

        if last is None:
            self.payload = list(values[:-1])
            return None
        if self.descriptor.error_return is None and len(values) == 1:
            if self.require_error_return:
                return RetryError.create(ErrorCode.NO_ERROR_RETURN, f"{_name(self.fn)} did not return an error value")
            self.payload = list(values)
            return None
        return RetryError.create(
            ErrorCode.INVALID_ERROR_SENTINEL,
            f"{_name(self.fn)} return's right most value must be an error, got {type(last).__name__}",
        )


def retry_dynamic(
    attempts: int,
    initial_delay: Delay,
    fn: Any,
    /,
    *args: Any,
    backoff: Backoff | Callable[[float], float] | None = None,
    jitter: Jitter | None = None,
    rng: random.Random | None = None,
    sleeper: Sleeper | None = None,
    on_retry: OnRetry | None = None,
    require_error_return: bool = False,
) -> Result[list[Any], RetryError]:
    """Call fn(*args) with retries, judging each outcome from its return value.

    Args:
        attempts: Attempt budget, must be at least 1
        initial_delay: Pause before the second attempt, seconds or timedelta
        fn: Any callable; positional args must bind to its signature
        *args: Positional arguments passed on every attempt
        backoff: Strategy override; without it the configured jittered
            exponential backoff is used and ``jitter``/``rng`` refine it
        jitter: Jitter to apply to pauses
        rng: Random source for the jitter, default or given
        sleeper: Blocking sleep function (default: time.sleep)
        on_retry: Callback ``(attempt, error, pause)`` before each pause
        require_error_return: Reject callables that cannot report failure
            (NO_ERROR_RETURN) instead of running them once

    Returns:
        Ok(payload) with the values preceding the trailing error slot, or
        Err(RetryError). Structural errors come back before any invocation.
    """
    checked = validate_call(attempts, initial_delay, fn, args, require_error_return=require_error_return)
    if checked.is_err():
        return checked  # type: ignore[return-value]

    call = DynamicCall(fn, args, checked.unwrap(), require_error_return=require_error_return)
    if backoff is None:
        backoff, jitter = default_backoff(), jitter or default_jitter(rng)
    elif rng is not None and jitter is not None and jitter.rng is None:
        jitter = replace(jitter, rng=rng)

    error = retry_with_backoff(
        1 if call.single_shot else attempts, initial_delay, backoff, call,
        jitter=jitter, sleeper=sleeper, on_retry=on_retry,
    )
    return Ok(call.payload) if error is None else Err(error)
