"""failstream error taxonomy.

This module defines the error hierarchy raised by failstream streams,
providing structured errors with specific error codes and context
information. Any exception instance may be configured as the injected
error of a FaultCounter; these classes are the defaults.
"""
from __future__ import annotations

from typing import Any

from failstream.models.constants import (
    DEFAULT_FAULT_CODE,
    END_OF_STREAM_CODE,
    STREAM_CLOSED_CODE,
)


class FailStreamError(Exception):
    """Base exception for all failstream errors.

    Attributes:
        code: Error code following the failstream:<area>/<name> pattern
        message: Human-readable error message
        details: Optional additional error context
    """

    def __init__(self, code: str, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serialize to ``{code, message, details}`` dict."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class InjectedFaultError(FailStreamError):
    """Default error injected by a FaultCounter once its limit is reached.

    Attributes:
        limit: The counter limit that triggered the fault, if known
    """

    def __init__(
        self,
        message: str = "Injected fault",
        limit: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        extra = {"limit": limit} if limit is not None else {}
        super().__init__(
            code=DEFAULT_FAULT_CODE,
            message=message,
            details={**extra, **(details or {})},
        )
        self.limit = limit


class StreamClosedError(FailStreamError):
    """Raised when an operation is attempted on a stream that was torn down."""

    def __init__(self, operation: str, details: dict[str, Any] | None = None) -> None:
        message = f"Stream is closed: cannot {operation}"
        super().__init__(
            code=STREAM_CLOSED_CODE,
            message=message,
            details={"operation": operation, **(details or {})},
        )
        self.operation = operation


class EndOfStreamError(FailStreamError):
    """Raised when a read finds no more input data."""

    def __init__(self, details: dict[str, Any] | None = None) -> None:
        super().__init__(
            code=END_OF_STREAM_CODE,
            message="End of stream",
            details=details or {},
        )


def error_code(error: BaseException | None) -> str | None:
    """Return a loggable code for an error value.

    FailStreamError instances report their ``code``; other exceptions report
    their class name. ``None`` stays ``None``.
    """
    if error is None:
        return None
    if isinstance(error, FailStreamError):
        return error.code
    return type(error).__name__


__all__ = [
    "EndOfStreamError",
    "FailStreamError",
    "InjectedFaultError",
    "StreamClosedError",
    "error_code",
]
