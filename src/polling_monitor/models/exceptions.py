"""
Custom exception classes for the polling monitor.

Provides specific exception types for the error scenarios of the monitor so
callers can tell configuration mistakes apart from lifecycle misuse.
"""

from typing import Any


class BaseError(Exception):
    """
    Base exception class for all polling monitor errors.

    All custom exceptions in the package inherit from this base class
    to enable consistent error handling and logging.
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        """
        Initialize the error.

        Args:
            message: Human-readable error description
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context information
            cause: Optional underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation including error code if present."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}', "
            f"context={self.context})"
        )


def _context(**values: Any) -> dict[str, Any]:
    """Build an error context from the values that were actually given."""
    return {key: value for key, value in values.items() if value is not None}


class ConfigurationError(BaseError):
    """Raised when a component is constructed with missing or invalid settings."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        expected_type: str | None = None,
        actual_value: Any | None = None,
    ):
        super().__init__(
            message,
            error_code="CONFIG_ERROR",
            context=_context(
                config_key=config_key,
                expected_type=expected_type,
                actual_value=None if actual_value is None else str(actual_value),
            ),
        )


class MonitoringError(BaseError):
    """Raised when the monitor is misconfigured or used in the wrong state."""

    def __init__(self, message: str, operation: str | None = None):
        super().__init__(message, error_code="MONITORING_ERROR", context=_context(operation=operation))


class InitializationError(BaseError):
    """Raised when an observer fails to build its initial snapshot."""

    def __init__(self, message: str, observer: str | None = None, cause: Exception | None = None):
        super().__init__(message, error_code="INITIALIZATION_ERROR", context=_context(observer=observer), cause=cause)


class ShutdownError(BaseError):
    """
    Raised when one or more observers fail to be destroyed.

    Every failure is kept in ``failures``; the first one is also the cause.
    """

    def __init__(self, message: str, failures: list[Exception] | None = None):
        self.failures = list(failures or [])
        super().__init__(
            message,
            error_code="SHUTDOWN_ERROR",
            context={"failures": [f"{type(e).__name__}: {e}" for e in self.failures]},
            cause=self.failures[0] if self.failures else None,
        )
