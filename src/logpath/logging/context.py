"""
Context for the library's own diagnostics.

Instrumented calls publish their ``ProcessContext`` in a contextvar (see
``logpath.correlation.context``). The processor below copies it into every
diagnostic the library logs, so a delivery failure or configuration error
can be traced back to the call that triggered it.
"""

from typing import Any

import structlog

from logpath.correlation.context import get_process_context


def add_context_processor(
    logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """
    Structlog processor that adds the current process context to every log entry.

    This is registered in configure_logging() and runs for every log call.
    """
    ctx = get_process_context()
    if ctx is None:
        return event_dict

    # Add context fields (don't override existing keys)
    for key, value in ctx.to_dict().items():
        if key not in event_dict:
            event_dict[key] = value

    return event_dict


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)
    """
    return structlog.get_logger(name)
