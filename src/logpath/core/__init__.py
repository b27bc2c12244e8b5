"""Shared primitives for logpath: error hierarchy and environment settings."""

from logpath.core.errors import (
    ConfigError,
    ErrorCategory,
    InvalidConfigError,
    LogPathError,
    TransportError,
)

__all__ = [
    "ErrorCategory",
    "LogPathError",
    "ConfigError",
    "InvalidConfigError",
    "TransportError",
]
