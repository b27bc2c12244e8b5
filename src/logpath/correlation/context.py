"""
Process context for instrumented calls.

A ``ProcessContext`` identifies one instrumented invocation: a fresh
``process_id`` per call plus the ``parent_id`` of the call it continues,
if any. Contexts are immutable.

While an instrumented body runs its context is also published in a
contextvar, so code inside the call (and the library's own diagnostics)
can read it without parameters being passed around:

    @log_path()
    def handle(self, order):
        ctx = get_process_context()
        print(ctx.process_id)
"""

import uuid
from contextvars import ContextVar
from dataclasses import dataclass, field


def _generate_process_id() -> str:
    """Generate a process identifier (UUID4 string)."""
    return str(uuid.uuid4())


@dataclass(frozen=True)
class ProcessContext:
    """Identifier pair attached to one instrumented invocation."""

    process_id: str = field(default_factory=_generate_process_id)
    parent_id: str | None = None

    def child(self) -> "ProcessContext":
        """Create a fresh context whose parent is this one."""
        return ProcessContext(parent_id=self.process_id)

    def to_dict(self) -> dict[str, str]:
        """Return non-None fields as dict."""
        result = {"process_id": self.process_id}
        if self.parent_id is not None:
            result["parent_id"] = self.parent_id
        return result


_current_process: ContextVar[ProcessContext | None] = ContextVar("logpath_process", default=None)


def get_process_context() -> ProcessContext | None:
    """Return the context of the innermost instrumented call running now, if any."""
    return _current_process.get()


class _ProcessToken:
    """Token for restoring the published context after a call completes."""

    def __init__(self, token):
        self._token = token

    def restore(self) -> None:
        """Restore the previously published context."""
        _current_process.reset(self._token)


def push_process_context(context: ProcessContext) -> _ProcessToken:
    """
    Publish ``context`` as the current one, returning a token to restore later.

    Usage:
        token = push_process_context(ctx)
        try:
            do_work()
        finally:
            token.restore()
    """
    return _ProcessToken(_current_process.set(context))
