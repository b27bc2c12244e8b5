"""
Log emission for logpath.

- record: pure builders for Enter/Exit/Error records
- emitter: routing to local output or remote endpoints
- transport: fire-and-forget HTTP delivery
"""

from logpath.emission.emitter import LogEmitter, endpoints_for, get_emitter, render_line
from logpath.emission.record import (
    LogAction,
    LogRecord,
    describe_error,
    enter_record,
    error_record,
    exit_record,
    format_message,
)
from logpath.emission.transport import HttpTransport, Transport

__all__ = [
    # Records
    "LogAction",
    "LogRecord",
    "enter_record",
    "exit_record",
    "error_record",
    "format_message",
    "describe_error",
    # Routing
    "LogEmitter",
    "endpoints_for",
    "render_line",
    "get_emitter",
    # Transport
    "Transport",
    "HttpTransport",
]
