"""
Routing of log records.

``LogEmitter`` builds a record for each point of an instrumented call and
routes it according to the configuration:

- ``dev_mode``: one line on the output stream (stdout by default), with the
  arguments appended as JSON when present. Nothing leaves the process.
- ``single``: the full record goes to the configured endpoint.
- ``multiple``: the record goes to every endpoint registered for exactly the
  record's level.

Delivery failures are logged and never reach the instrumented caller.
"""

from __future__ import annotations

import json
import sys
from collections.abc import Mapping, Sequence
from typing import Any, TextIO

import structlog

from logpath.config.models import LogConfig, LogLevel, LogMode
from logpath.correlation.context import ProcessContext
from logpath.emission.record import LogRecord, enter_record, error_record, exit_record
from logpath.emission.transport import HttpTransport, Transport

logger = structlog.get_logger(__name__)


def endpoints_for(config: LogConfig, log_level: LogLevel) -> list[str]:
    """Return the endpoints a record at ``log_level`` is delivered to."""
    if config.log_mode is LogMode.SINGLE:
        return [config.endpoint] if config.endpoint else []
    return [param.endpoint for param in config.endpoint_params if param.log_level == log_level]


def render_line(record: LogRecord) -> str:
    """Render the local output line for ``record``."""
    line = record.message
    if record.args:
        line += f" with args {json.dumps(record.args, default=str)}"
    if record.kwargs:
        line += f" and kwargs {json.dumps(record.kwargs, default=str)}"
    return line


class LogEmitter:
    """Builds and routes the records of instrumented calls."""

    def __init__(self, transport: Transport | None = None, output: TextIO | None = None):
        self._transport = transport
        self._output = output

    @property
    def transport(self) -> Transport:
        if self._transport is None:
            self._transport = HttpTransport()
        return self._transport

    def emit_enter(
        self,
        config: LogConfig,
        context: ProcessContext,
        class_name: str,
        method_name: str,
        log_level: LogLevel,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
        is_sensitive: bool = False,
    ) -> LogRecord:
        record = enter_record(context, class_name, method_name, log_level, args, kwargs, is_sensitive)
        self.dispatch(config, record)
        return record

    def emit_exit(
        self,
        config: LogConfig,
        context: ProcessContext,
        class_name: str,
        method_name: str,
        log_level: LogLevel,
    ) -> LogRecord:
        record = exit_record(context, class_name, method_name, log_level)
        self.dispatch(config, record)
        return record

    def emit_error(
        self,
        config: LogConfig,
        context: ProcessContext,
        class_name: str,
        method_name: str,
        error: object,
    ) -> LogRecord:
        record = error_record(context, class_name, method_name, error)
        self.dispatch(config, record)
        return record

    def dispatch(self, config: LogConfig, record: LogRecord) -> None:
        """Write ``record`` locally in dev mode, else hand it to the transport."""
        if config.dev_mode:
            print(render_line(record), file=self._output or sys.stdout, flush=True)
            return

        endpoints = endpoints_for(config, record.log_level)
        if not endpoints:
            return

        payload = record.to_dict()
        for endpoint in endpoints:
            try:
                self.transport.send(endpoint, payload)
            except Exception as e:
                logger.error(
                    "log_delivery_failed",
                    endpoint=endpoint,
                    process_id=record.process_id,
                    error=str(e),
                    error_type=type(e).__name__,
                )


_default_emitter: LogEmitter | None = None


def get_emitter() -> LogEmitter:
    """Return the process-wide emitter (stdout, HTTP transport created on first delivery)."""
    global _default_emitter
    if _default_emitter is None:
        _default_emitter = LogEmitter()
    return _default_emitter
