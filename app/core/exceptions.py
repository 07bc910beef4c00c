"""Custom exception classes"""
from typing import Any, Optional


class AppException(Exception):
    """Base exception for application errors"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "AppError",
        details: Optional[Any] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Validation error exception"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_type="ValidationError",
            details=details
        )


class SplitMismatchError(AppException):
    """
    Raised when the owed shares of an expense do not add up to its amount.

    Both totals are kept verbatim as scale-2 decimal strings so callers can
    show them to the user.
    """

    def __init__(self, expected: str, actual: str):
        self.expected = expected
        self.actual = actual
        super().__init__(
            message=f"Sum of splits ({actual}) does not equal expense total ({expected})",
            status_code=422,
            error_type="SplitMismatchError",
            details={"expected": expected, "actual": actual}
        )


class NotFoundError(AppException):
    """Resource not found exception"""

    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=404,
            error_type="NotFoundError",
            details=details
        )


class ConflictError(AppException):
    """Resource conflict exception (e.g., duplicate entry)"""

    def __init__(self, message: str = "Resource already exists", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_type="ConflictError",
            details=details
        )


class PersistenceError(AppException):
    """Storage layer failure; the surrounding transaction has been rolled back"""

    def __init__(self, message: str = "Database error occurred", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_type="PersistenceError",
            details=details
        )
