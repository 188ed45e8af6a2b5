"""
Exception classes raised by the toggle registry.
"""
from typing import Any, Hashable, Optional


class ToggleError(Exception):
    """Base exception for toggle registry errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[Any] = None,
        original_error: Optional[Exception] = None,
    ):
        self.code = code
        self.message = message
        self.details = details
        self.original_error = original_error
        super().__init__(self.message)


class UndefinedToggle(ToggleError):
    """Raised when a toggle is queried before it has been set."""

    def __init__(
        self,
        key: Hashable,
        message: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        self.key = key
        super().__init__(
            code="TOGGLE_NOT_SET",
            message=message or f"toggle {key} not set",
            details={"key": key},
            original_error=original_error,
        )
