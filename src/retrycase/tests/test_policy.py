"""Tests for RetryPolicy and the retrying decorator."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from retrycase.foundation.config import clear_settings_cache
from retrycase.foundation.errors import ErrorCode, Result, RetryException
from retrycase.runtime.retry import (
    ConstantBackoff,
    ExponentialBackoff,
    FunctionBackoff,
    Jitter,
    RetryPolicy,
    retrying,
)


def failing() -> Exception:
    return OSError("unreachable")


def test_policy_defaults() -> None:
    p = RetryPolicy()
    assert p.attempts == 3
    assert isinstance(p.backoff, ExponentialBackoff)
    assert isinstance(p.jitter, Jitter)


@pytest.mark.parametrize("bad", [{"attempts": 0}, {"initial_delay": -1.0}, {"unknown": 1}])
def test_policy_validation(bad: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        RetryPolicy(**bad)


def test_function_backoff_is_wrapped() -> None:
    p = RetryPolicy(backoff=lambda d: d + 1)
    assert isinstance(p.backoff, FunctionBackoff)


def test_policy_run(sleeps: list[float]) -> None:
    p = RetryPolicy(attempts=3, initial_delay=0.2, backoff=ConstantBackoff(0.5), jitter=None, sleeper=sleeps.append)
    err = p.run(failing)
    assert err is not None and err.attempts == 3
    assert sleeps == [0.2, 0.5]


def test_policy_call(sleeps: list[float]) -> None:
    p = RetryPolicy(attempts=2, initial_delay=0.1, jitter=None, sleeper=sleeps.append)

    def div(a: float, b: float) -> tuple[float, ZeroDivisionError | None]:
        return (0.0, ZeroDivisionError("zero")) if b == 0 else (a / b, None)

    assert p.call(div, 8.0, 2.0).unwrap() == [4.0]
    assert p.call(div, 8.0, 0.0).unwrap_err().attempts == 2
    assert sleeps == [0.1]


def test_policy_on_retry(sleeps: list[float]) -> None:
    seen: list[int] = []
    p = RetryPolicy(attempts=3, initial_delay=0, on_retry=lambda n, e, pause: seen.append(n), sleeper=sleeps.append)
    p.run(failing)
    assert seen == [1, 2]


def test_policy_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETRYCASE_RETRY__ATTEMPTS", "7")
    monkeypatch.setenv("RETRYCASE_RETRY__JITTER", "false")
    clear_settings_cache()
    p = RetryPolicy.from_settings(initial_delay=0.5)
    assert p.attempts == 7
    assert p.initial_delay == 0.5
    assert p.jitter is None


def test_policy_excludes_callables_from_dump() -> None:
    dumped = RetryPolicy(attempts=2, on_retry=lambda *a: None).model_dump(include={"attempts", "initial_delay", "on_retry"})
    assert dumped == {"attempts": 2, "initial_delay": 0.1}


# ═════════════════════════════════════════════════════════════════════════════
# Decorator
# ═════════════════════════════════════════════════════════════════════════════


def test_decorator_returns_result() -> None:
    calls = 0

    @retrying(policy=RetryPolicy(attempts=3, initial_delay=0))
    def lookup(key: str) -> tuple[str, KeyError | None]:
        nonlocal calls
        calls += 1
        return ("", KeyError(key)) if calls < 2 else (key * 2, None)

    result = lookup("ab")
    assert isinstance(result, Result)
    assert result.unwrap() == ["abab"]
    assert calls == 2
    assert lookup.__name__ == "lookup"
    assert lookup.retry_policy.attempts == 3


def test_decorator_raise_on_error() -> None:
    @retrying(2, 0, raise_on_error=True)
    def always() -> tuple[int, ValueError | None]:
        return 0, ValueError("never works")

    with pytest.raises(RetryException) as info:
        always()
    assert info.value.code == ErrorCode.OPERATION_FAILED
    assert isinstance(info.value.__cause__, ValueError)


def test_decorator_overrides_policy() -> None:
    @retrying(attempts=5, policy=RetryPolicy(attempts=2, initial_delay=0))
    def f() -> Exception | None:
        return None

    assert f.retry_policy.attempts == 5


def test_bare_decorator(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("RETRYCASE_RETRY__INITIAL_DELAY", "0")
    clear_settings_cache()

    @retrying
    def ping() -> Exception | None:
        return None

    assert ping().unwrap() == []


def test_decorator_binds_keywords() -> None:
    @retrying(1, 0)
    def greet(name: str, punct: str = "!") -> tuple[str, Exception | None]:
        return f"hi {name}{punct}", None

    assert greet("bo", punct="?").unwrap() == ["hi bo?"]
