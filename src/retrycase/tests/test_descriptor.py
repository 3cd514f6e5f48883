"""Tests for callable signature inspection."""

from __future__ import annotations

from typing import Any, NoReturn, Optional

import pytest

from retrycase.foundation.errors import Result
from retrycase.runtime.retry import describe


def plain(a: int, b: int) -> tuple[int, Exception | None]: ...
def optional_err(a: int) -> Optional[OSError]: ...
def non_error(a: int) -> bool: ...
def many(*args: int) -> tuple[int, ...]: ...
def opaque() -> Any: ...
def nothing() -> None: ...
def never() -> NoReturn: ...
def empty_tuple() -> tuple[()]: ...
def mixed(a: int) -> tuple[int, int | ValueError]: ...
def opaque_union() -> tuple[int, int | Any]: ...
def error_stream() -> tuple[ValueError | None, ...]: ...
def result() -> Result[int, str]: ...
def keyword_only(a: int, *, strict: bool) -> tuple[int, Exception | None]: ...
def unresolvable() -> "Missing": ...  # noqa: F821


class Greeter:
    def __call__(self, x: str) -> tuple[str, Exception | None]: ...


@pytest.mark.parametrize(
    ("fn", "arity", "error_return"),
    [
        (plain, 2, True),
        (optional_err, 1, True),
        (non_error, 1, False),
        (many, None, False),
        (opaque, None, None),
        (nothing, 0, None),
        (never, 0, None),
        (empty_tuple, 0, None),
        (mixed, 2, True),
        (opaque_union, 2, None),
        (error_stream, None, True),
        (result, 1, True),
        (unresolvable, None, None),
        (lambda: 1, None, None),
    ],
)
def test_return_shape(fn: Any, arity: int | None, error_return: bool | None) -> None:
    d = describe(fn)
    assert d.return_arity == arity
    assert d.error_return is error_return


def test_positional_counts() -> None:
    d = describe(plain)
    assert (d.variadic, d.required, d.maximum) == (False, 2, 2)
    assert d.expected() == "2"
    assert d.accepts((1, 2))
    assert not d.accepts((1,))
    assert not d.accepts((1, 2, 3))


def test_variadic_counts() -> None:
    d = describe(many)
    assert d.variadic and d.maximum is None
    assert d.expected() == "at least 0"
    assert d.accepts(())
    assert d.accepts(tuple(range(20)))


def test_defaults_range() -> None:
    def f(a: int, b: int = 1, c: int = 2) -> None: ...

    d = describe(f)
    assert d.expected() == "1 to 3"
    assert d.accepts((1,)) and d.accepts((1, 2, 3))


def test_required_keyword_only_cannot_bind() -> None:
    assert not describe(keyword_only).accepts((1,))


def test_callable_instance() -> None:
    d = describe(Greeter())
    assert d.required == 1
    assert (d.return_arity, d.error_return) == (2, True)


def test_builtin_without_signature() -> None:
    d = describe(max)
    assert d.signature is None
    assert d.variadic
    assert d.accepts((1, 2, 3))
