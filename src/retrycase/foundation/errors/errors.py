"""Structured retry errors.

Failures are returned, not raised: every entry point reports problems as a
RetryError value tagged with an ErrorCode. RetryException exists for callers
that prefer raising at their own boundary.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field


class ErrorCode(StrEnum):
    """Error categories produced by retrycase.

    Everything except OPERATION_FAILED is a programmer error detected before
    (or instead of) retrying.
    """
    INVALID_ATTEMPT_BUDGET = "INVALID_ATTEMPT_BUDGET"
    NOT_CALLABLE = "NOT_CALLABLE"
    INVALID_DELAY = "INVALID_DELAY"
    ARGUMENT_COUNT_MISMATCH = "ARGUMENT_COUNT_MISMATCH"
    NO_RETURN_VALUES = "NO_RETURN_VALUES"
    NO_ERROR_RETURN = "NO_ERROR_RETURN"
    INVALID_ERROR_SENTINEL = "INVALID_ERROR_SENTINEL"
    OPERATION_FAILED = "OPERATION_FAILED"


# Structural errors: reported before the first attempt, never consume budget
STRUCTURAL_CODES: frozenset[ErrorCode] = frozenset({
    ErrorCode.INVALID_ATTEMPT_BUDGET,
    ErrorCode.NOT_CALLABLE,
    ErrorCode.INVALID_DELAY,
    ErrorCode.ARGUMENT_COUNT_MISMATCH,
    ErrorCode.NO_RETURN_VALUES,
    ErrorCode.NO_ERROR_RETURN,
})


class RetryError(BaseModel):
    """Failure outcome of a retried call.

    Attributes:
        code: Machine-readable error category
        message: Human-readable description
        recoverable: Whether the retry loop may try again after this error
        attempts: Invocations performed before giving up (0 for structural errors)
        cause: The error value the operation produced, if any
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        arbitrary_types_allowed=True,
        json_schema_extra={
            "title": "Retry Error",
            "examples": [{
                "code": "OPERATION_FAILED",
                "message": "Can not divide by zero",
                "recoverable": True,
                "attempts": 2,
            }],
        },
    )

    code: ErrorCode = ErrorCode.OPERATION_FAILED
    message: Annotated[str, Field(min_length=1)]
    recoverable: bool = False
    attempts: Annotated[int, Field(ge=0)] = 0
    cause: Any = Field(default=None, exclude=True, repr=False)

    @computed_field
    @property
    def is_structural(self) -> bool:
        """Whether the error was detected before any invocation."""
        return self.code in STRUCTURAL_CODES

    @classmethod
    def create(cls, code: ErrorCode, message: str) -> Self:
        """Non-recoverable error for a malformed call."""
        return cls(code=code, message=message)

    @classmethod
    def from_cause(cls, cause: Any, *, attempts: int = 1) -> Self:
        """Recoverable OPERATION_FAILED wrapping the value an operation failed with."""
        text = str(cause) or type(cause).__name__
        return cls(code=ErrorCode.OPERATION_FAILED, message=text, recoverable=True, attempts=attempts, cause=cause)

    def with_attempts(self, attempts: int) -> Self:
        return self.model_copy(update={"attempts": attempts})

    def to_exception(self) -> RetryException:
        """Wrap as a raisable exception chained to the original cause."""
        exc = RetryException(self)
        if isinstance(self.cause, BaseException):
            exc.__cause__ = self.cause
        return exc

    def __str__(self) -> str:
        tail = f" after {self.attempts} attempt{'s' if self.attempts != 1 else ''}" if self.attempts else ""
        return f"retry: {self.message} [{self.code}]{tail}"


class RetryException(Exception):
    """Exception wrapping a RetryError for raising."""

    __slots__ = ("error",)

    def __init__(self, error: RetryError) -> None:
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code
