"""
Structured error types for logpath.

Every error raised by the library extends ``LogPathError`` so callers can
catch library failures without catching the failures of the functions they
instrument.

Hierarchy:
    ::

        LogPathError                 (category, context, cause)
        ├── ConfigError              (CONFIG)
        │   └── InvalidConfigError   (key, value)
        └── TransportError           (TRANSPORT)

Guardrails:
    ❌ DON'T: Let a TransportError reach application code
    ✅ DO: Report it through the library logger and move on

    ❌ DON'T: Swallow the original exception when wrapping
    ✅ DO: Pass it as cause= for error chaining

Examples:
    >>> error = InvalidConfigError("devMode", "yes")
    >>> error.category
    <ErrorCategory.CONFIG: 'CONFIG'>
    >>> error.to_dict()["key"]
    'devMode'
"""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification."""

    CONFIG = "CONFIG"  # Invalid routing configuration
    TRANSPORT = "TRANSPORT"  # Delivery to a remote sink failed
    INTERNAL = "INTERNAL"  # Bugs, unexpected state


class LogPathError(Exception):
    """
    Base exception for all logpath errors.

    Carries a category, free-form context for structured logging and an
    optional chained cause.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = dict(context or {})
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result: dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        if self.context:
            result["context"] = dict(self.context)
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(LogPathError):
    """Routing configuration error. The configuration must be fixed by the caller."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """A partial configuration failed validation."""

    def __init__(
        self,
        key: str,
        value: Any,
        message: str | None = None,
        *,
        cause: Exception | None = None,
    ):
        self.key = key
        self.value = value
        super().__init__(
            message or f"Invalid configuration for {key}: {value!r}",
            context={"key": key},
            cause=cause,
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["key"] = self.key
        return result


# =============================================================================
# TRANSPORT ERRORS
# =============================================================================


class TransportError(LogPathError):
    """Delivering a record to a remote endpoint failed."""

    default_category = ErrorCategory.TRANSPORT

    def __init__(self, endpoint: str, message: str, *, cause: Exception | None = None):
        self.endpoint = endpoint
        super().__init__(message, context={"endpoint": endpoint}, cause=cause)
