"""
Structured diagnostics for logpath itself.

Usage:
    from logpath.logging import configure_logging, get_logger

    configure_logging(level="DEBUG", format="json")
    log = get_logger(__name__)
"""

from logpath.logging.config import configure_logging, is_configured, is_debug_enabled
from logpath.logging.context import add_context_processor, get_logger

__all__ = [
    "configure_logging",
    "is_configured",
    "is_debug_enabled",
    "add_context_processor",
    "get_logger",
]
