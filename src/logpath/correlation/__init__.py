"""
Call correlation for logpath.

- ``ProcessContext``: identifier pair of one instrumented invocation
- ``CorrelationRegistry``: owner → current context, reclaimed with the owner
- ``get_process_context``: context of the instrumented call running now
"""

from logpath.correlation.context import (
    ProcessContext,
    get_process_context,
    push_process_context,
)
from logpath.correlation.registry import CorrelationRegistry, get_registry

__all__ = [
    "ProcessContext",
    "get_process_context",
    "push_process_context",
    "CorrelationRegistry",
    "get_registry",
]
