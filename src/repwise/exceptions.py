"""Exceptions raised by the progress engine.

Only two failure kinds exist. Malformed feedback is rejected before any
state is touched, and store failures are surfaced to the caller as-is
without retrying.
"""

from typing import Any


class RepwiseError(Exception):
    """Base exception for repwise errors.

    Attributes:
        message: Human-readable error message
        details: Optional dictionary with extra context
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable error payload."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(RepwiseError):
    """Feedback entry or setting value failed validation."""

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        details = {}
        if field is not None:
            details["field"] = field
        if value is not None:
            details["value"] = repr(value)
        super().__init__(message, details)
        self.field = field


class PersistenceError(RepwiseError):
    """The progress store could not be read or written."""

    def __init__(self, message: str, operation: str, user_id: str | None = None) -> None:
        details = {"operation": operation}
        if user_id is not None:
            details["user_id"] = user_id
        super().__init__(message, details)
        self.operation = operation
