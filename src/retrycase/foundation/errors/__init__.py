"""Error handling for retrycase.

- ErrorCode: Error categories for rejected or failed calls
- RetryError/RetryException: Structured error value and its raisable wrapper
- Result/Ok/Err: Success-or-failure return values
"""

from .errors import STRUCTURAL_CODES, ErrorCode, RetryError, RetryException
from .result import Err, Ok, Result

__all__ = [
    "ErrorCode", "RetryError", "RetryException", "STRUCTURAL_CODES",
    "Result", "Ok", "Err",
]
