"""Reusable retry configuration.

A RetryPolicy bundles the attempt budget, seed delay, strategy and jitter so
the same settings can drive plain operations (run), arbitrary callables
(call) and decorated functions (retrying).

Example:
    >>> from retrycase.runtime.retry.backoff import LinearBackoff
    >>> policy = RetryPolicy(attempts=5, initial_delay=0.2, backoff=LinearBackoff(increment=0.5))
    >>> policy.run(lambda: None) is None
    True
"""

from __future__ import annotations

from functools import partial, wraps
from typing import Annotated, Any, Callable, ParamSpec, TypeVar, overload

from pydantic import BaseModel, ConfigDict, Field, InstanceOf, field_validator

from retrycase.foundation.config import get_settings
from retrycase.foundation.errors import Result, RetryError

from .backoff import Backoff, ExponentialBackoff, Jitter, as_backoff, default_backoff, default_jitter
from .invoker import retry_dynamic
from .loop import OnRetry, Operation, Sleeper, retry_with_backoff

P = ParamSpec("P")
T = TypeVar("T")


class RetryPolicy(BaseModel):
    """Retry settings for repeated use.

    Attributes:
        attempts: Attempt budget (at least 1)
        initial_delay: Seed delay in seconds
        backoff: Delay progression (default: ExponentialBackoff)
        jitter: Pause randomization, None to disable
        on_retry: Optional callback ``(attempt, error, pause)``
        sleeper: Blocking sleep function, None for time.sleep
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        json_schema_extra={
            "title": "Retry Policy",
            "examples": [{"attempts": 3, "initial_delay": 0.1}],
        },
    )

    attempts: Annotated[int, Field(ge=1)] = 3
    initial_delay: Annotated[float, Field(ge=0.0)] = 0.1
    backoff: Backoff = Field(default_factory=ExponentialBackoff, repr=False)
    jitter: InstanceOf[Jitter] | None = Field(default_factory=Jitter, repr=False)
    on_retry: OnRetry | None = Field(default=None, exclude=True, repr=False)
    sleeper: Sleeper | None = Field(default=None, exclude=True, repr=False)

    @field_validator("backoff", mode="before")
    @classmethod
    def _wrap_function(cls, v: Backoff | Callable[[float], float]) -> Backoff:
        """Accept a bare ``current -> next`` function as the strategy."""
        return as_backoff(v)

    @classmethod
    def from_settings(cls, **overrides: Any) -> RetryPolicy:
        """Policy built from RETRYCASE_RETRY__* settings, with keyword overrides."""
        cfg = get_settings().retry
        values: dict[str, Any] = {
            "attempts": cfg.attempts,
            "initial_delay": cfg.initial_delay,
            "backoff": default_backoff(),
            "jitter": default_jitter(),
        }
        return cls(**(values | overrides))

    def run(self, operation: Operation) -> RetryError | None:
        """Retry a zero-argument operation under this policy."""
        return retry_with_backoff(
            self.attempts, self.initial_delay, self.backoff, operation,
            jitter=self.jitter, sleeper=self.sleeper, on_retry=self.on_retry,
        )

    def call(self, fn: Any, /, *args: Any, require_error_return: bool = False) -> Result[list[Any], RetryError]:
        """Retry fn(*args) through the dynamic invoker under this policy."""
        return retry_dynamic(
            self.attempts, self.initial_delay, fn, *args,
            backoff=self.backoff, jitter=self.jitter, sleeper=self.sleeper,
            on_retry=self.on_retry, require_error_return=require_error_return,
        )


@overload
def retrying(
    attempts: int | None = None, initial_delay: float | None = None, *,
    policy: RetryPolicy | None = None, raise_on_error: bool = False,
) -> Callable[[Callable[P, T]], Callable[P, Any]]: ...

@overload
def retrying(func: Callable[P, T], /) -> Callable[P, Any]: ...


def retrying(
    attempts: Any = None,
    initial_delay: float | None = None,
    *,
    policy: RetryPolicy | None = None,
    raise_on_error: bool = False,
) -> Any:
    """Decorator routing every call through the dynamic invoker.

    Decorated functions return ``Result[list, RetryError]``; with
    ``raise_on_error=True`` they return the payload and raise RetryException
    (chained to the last cause) on failure. Usable bare or with arguments.
    Keyword arguments are bound with functools.partial before retrying.

    Example:
        >>> @retrying(attempts=3, initial_delay=0.5)
        ... def fetch(url: str) -> tuple[bytes, OSError | None]:
        ...     ...
    """
    if callable(attempts):
        return retrying()(attempts)

    def decorator(func: Callable[P, T]) -> Callable[P, Any]:
        overrides = {k: v for k, v in (("attempts", attempts), ("initial_delay", initial_delay)) if v is not None}
        active = policy.model_copy(update=overrides) if policy else RetryPolicy.from_settings(**overrides)

        @wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            result = active.call(partial(func, **kwargs) if kwargs else func, *args)
            return result.unwrap() if raise_on_error else result

        wrapper.retry_policy = active  # type: ignore[attr-defined]
        return wrapper

    return decorator
