"""
Logging configuration for the library's own diagnostics.

Instrumented-call records are routed by the emitter, not through here. This
module only configures how logpath reports its own events (configuration
failures, delivery failures, debug traces).

Configuration is read from environment variables:
- LOGPATH_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
- LOGPATH_LOG_FORMAT: json | console (default: console)

Usage:
    from logpath.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import os
import sys
from typing import Literal

import structlog
from structlog.types import Processor

from logpath.logging.context import add_context_processor

# Track if logging has been configured
_configured = False
_handler: logging.Handler | None = None


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for logpath diagnostics.

    Opt-in: a host application that owns structlog should not call this.
    Only the "logpath" stdlib logger gets a handler; the root logger is
    left untouched. Subsequent calls are no-ops unless force=True.

    Args:
        level: Log level (overrides LOGPATH_LOG_LEVEL env var)
        format: Output format (overrides LOGPATH_LOG_FORMAT env var)
        force: Reconfigure even if already configured
    """
    global _configured, _handler

    if _configured and not force:
        return

    log_level = (level or os.environ.get("LOGPATH_LOG_LEVEL", "INFO")).upper()
    log_format = (format or os.environ.get("LOGPATH_LOG_FORMAT", "console")).lower()

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        # UTC ISO-8601 with Z suffix
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        # Process context of the instrumented call in flight, if any
        add_context_processor,
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=False,
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Only the "logpath" logger is touched; the root logger belongs to the host.
    # Diagnostics go to stderr so they never mix with dev-mode records on stdout.
    lib_logger = logging.getLogger("logpath")
    if _handler is not None:
        lib_logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(message)s"))
    lib_logger.addHandler(_handler)
    lib_logger.setLevel(getattr(logging, log_level, logging.INFO))
    lib_logger.propagate = False

    _configured = True


def is_debug_enabled() -> bool:
    """Check if DEBUG level logging is enabled for logpath."""
    return logging.getLogger("logpath").isEnabledFor(logging.DEBUG)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
