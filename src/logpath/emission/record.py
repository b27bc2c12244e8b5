"""
Log records for instrumented calls.

Pure builders: every function here derives a ``LogRecord`` from a process
context, the call's identity and its outcome. Nothing is written or sent.

Message format:
    2024-01-01T00:00:00.000Z [info: <parent_id> > <process_id>]: Enter Orders.place
    2024-01-01T00:00:00.000Z [info: <process_id>]: Enter Orders.place      (no parent)

Wire format (``LogRecord.to_dict``) uses camelCase keys and omits absent
fields:
    {"processId": ..., "parentId": ..., "logLevel": "info", "className": "Orders",
     "methodName": "place", "action": "Enter", "timestamp": 1704067200000,
     "message": ..., "args": [...]}
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from logpath.config.models import LogLevel
from logpath.correlation.context import ProcessContext


class LogAction(str, Enum):
    """Point of the call a record describes."""

    ENTER = "Enter"
    EXIT = "Exit"
    ERROR = "Error"


def _iso_timestamp(moment: datetime) -> str:
    """Return ``moment`` in ISO-8601 UTC with millisecond precision and Z suffix."""
    return moment.strftime("%Y-%m-%dT%H:%M:%S.%f")[:-3] + "Z"


def format_message(
    log_level: LogLevel,
    context: ProcessContext,
    class_name: str,
    method_name: str,
    action: LogAction,
    moment: datetime | None = None,
) -> str:
    """Render the human-readable line for a record."""
    moment = moment or datetime.now(UTC)
    ids = f"{context.parent_id} > {context.process_id}" if context.parent_id else context.process_id
    return (
        f"{_iso_timestamp(moment)} [{log_level.value}: {ids}]: "
        f"{action.value} {class_name}.{method_name}"
    )


def describe_error(error: object) -> str:
    """Describe a failure: an exception's message (or its type name), else its text."""
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return str(error)


@dataclass
class LogRecord:
    """One Enter, Exit or Error record of an instrumented call."""

    process_id: str
    log_level: LogLevel
    class_name: str
    method_name: str
    action: LogAction
    timestamp: int  # epoch milliseconds
    message: str
    parent_id: str | None = None
    args: list[Any] | None = None
    kwargs: dict[str, Any] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire form, omitting absent fields."""
        result: dict[str, Any] = {"processId": self.process_id}
        if self.parent_id is not None:
            result["parentId"] = self.parent_id
        result.update(
            {
                "logLevel": self.log_level.value,
                "className": self.class_name,
                "methodName": self.method_name,
                "action": self.action.value,
                "timestamp": self.timestamp,
                "message": self.message,
            }
        )
        if self.args is not None:
            result["args"] = self.args
        if self.kwargs is not None:
            result["kwargs"] = self.kwargs
        if self.error is not None:
            result["error"] = self.error
        return result


def _build(
    context: ProcessContext,
    class_name: str,
    method_name: str,
    log_level: LogLevel,
    action: LogAction,
    **extra: Any,
) -> LogRecord:
    now = datetime.now(UTC)
    return LogRecord(
        process_id=context.process_id,
        parent_id=context.parent_id,
        log_level=log_level,
        class_name=class_name,
        method_name=method_name,
        action=action,
        timestamp=int(now.timestamp() * 1000),
        message=format_message(log_level, context, class_name, method_name, action, now),
        **extra,
    )


def enter_record(
    context: ProcessContext,
    class_name: str,
    method_name: str,
    log_level: LogLevel,
    args: Sequence[Any] = (),
    kwargs: Mapping[str, Any] | None = None,
    is_sensitive: bool = False,
) -> LogRecord:
    """Build the Enter record. Arguments are left out of sensitive calls."""
    extra: dict[str, Any] = {}
    if not is_sensitive:
        extra["args"] = list(args)
        if kwargs:
            extra["kwargs"] = dict(kwargs)
    return _build(context, class_name, method_name, log_level, LogAction.ENTER, **extra)


def exit_record(
    context: ProcessContext,
    class_name: str,
    method_name: str,
    log_level: LogLevel,
) -> LogRecord:
    """Build the Exit record."""
    return _build(context, class_name, method_name, log_level, LogAction.EXIT)


def error_record(
    context: ProcessContext,
    class_name: str,
    method_name: str,
    error: object,
) -> LogRecord:
    """Build the Error record. Always at ``error`` level, whatever the call's level."""
    return _build(
        context,
        class_name,
        method_name,
        LogLevel.ERROR,
        LogAction.ERROR,
        error=describe_error(error),
    )
