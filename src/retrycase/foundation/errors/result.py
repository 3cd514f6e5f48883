"""Result/Either monad carrying a retried call's payload or its error.

The dynamic invoker returns Result[list, RetryError] so success and failure
travel as values. Callers that want the (values, error) pair use to_tuple().
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")
E = TypeVar("E")
U = TypeVar("U")
F = TypeVar("F")


class Result(Generic[T, E]):
    """Discriminated union of success (Ok) and failure (Err).

    Examples:
        >>> Ok([10]).map(len).unwrap()
        1
        >>> Err("boom").unwrap_or([])
        []
        >>> Ok([3.0]).to_tuple()
        ([3.0], None)
    """

    __slots__ = ("_value", "_is_ok")
    __match_args__ = ("_value",)

    def __init__(self, value: T | E, is_ok: bool) -> None:
        self._value = value
        self._is_ok = is_ok

    # ─── Type Checking ───────────────────────────────────────────────

    def is_ok(self) -> bool:
        return self._is_ok

    def is_err(self) -> bool:
        return not self._is_ok

    # ─── Value Extraction ────────────────────────────────────────────

    def unwrap(self) -> T:
        """Extract Ok value.

        Raises:
            RetryException: when the error is a RetryError
            RuntimeError: for any other Err value
        """
        if self._is_ok:
            return self._value  # type: ignore[return-value]
        if (to_exc := getattr(self._value, "to_exception", None)) is not None:
            raise to_exc()
        raise RuntimeError(f"unwrap() on Err: {self._value}")

    def unwrap_err(self) -> E:
        """Extract Err value. Raises RuntimeError on Ok."""
        if not self._is_ok:
            return self._value  # type: ignore[return-value]
        raise RuntimeError(f"unwrap_err() on Ok: {self._value}")

    def unwrap_or(self, default: T) -> T:
        return self._value if self._is_ok else default  # type: ignore[return-value]

    def ok(self) -> T | None:
        return self._value if self._is_ok else None  # type: ignore[return-value]

    def err(self) -> E | None:
        return None if self._is_ok else self._value  # type: ignore[return-value]

    # ─── Transformations ─────────────────────────────────────────────

    def map(self, f: Callable[[T], U]) -> Result[U, E]:
        return Ok(f(self._value)) if self._is_ok else self  # type: ignore[arg-type, return-value]

    def map_err(self, f: Callable[[E], F]) -> Result[T, F]:
        return self if self._is_ok else Err(f(self._value))  # type: ignore[arg-type, return-value]

    def flat_map(self, f: Callable[[T], Result[U, E]]) -> Result[U, E]:
        """Monadic bind: chain a step that can itself fail."""
        return f(self._value) if self._is_ok else self  # type: ignore[arg-type, return-value]

    and_then = flat_map

    def match(self, *, ok: Callable[[T], U], err: Callable[[E], U]) -> U:
        return ok(self._value) if self._is_ok else err(self._value)  # type: ignore[arg-type]

    def to_tuple(self) -> tuple[T | None, E | None]:
        """Convert to the (values, error) pair; exactly one side is None."""
        return (self._value, None) if self._is_ok else (None, self._value)  # type: ignore[return-value]

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __bool__(self) -> bool:
        return self._is_ok

    def __repr__(self) -> str:
        return f"{'Ok' if self._is_ok else 'Err'}({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return self._is_ok == other._is_ok and self._value == other._value

    __hash__ = None  # type: ignore[assignment]  # payloads are lists

    def __iter__(self) -> Iterator[T]:
        if self._is_ok:
            yield self._value  # type: ignore[misc]


def Ok(value: T) -> Result[T, E]:  # noqa: N802
    """Construct success variant."""
    return Result(value, True)


def Err(error: E) -> Result[T, E]:  # noqa: N802
    """Construct failure variant."""
    return Result(error, False)
