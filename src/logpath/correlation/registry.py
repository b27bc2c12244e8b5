"""
Correlation registry.

Associates an *owner* (the object an instrumented method runs on) with the
most recent ``ProcessContext`` created through it, so nested calls on the
same owner can name their parent without any context being passed in.

Design:
- Entries are keyed by owner identity, not equality, so unhashable owners
  and owners with custom ``__eq__`` are tracked correctly.
- The association is non-owning: each entry holds a ``weakref.ref`` to its
  owner with a callback that drops the entry once the owner is collected.
- Owners that cannot be weakly referenced (``__slots__`` classes without
  ``__weakref__``, ints, ...) are held strongly. Their entries only go away
  through ``end()`` or ``scoped()``.
- One live context per owner. A child call replaces the owner's entry, so a
  grandchild sees the nearest ancestor, not the root. This is a per-owner
  chain rather than a call stack: concurrent children on one owner may link
  to a sibling.

Usage:
    registry = CorrelationRegistry()

    root = registry.begin_top_level()      # never stored
    child = registry.begin_child(service)  # stored for ``service``
    grandchild = registry.begin_child(service)
    assert grandchild.parent_id == child.process_id

    registry.end(service)
"""

from __future__ import annotations

import weakref
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import structlog

from logpath.correlation.context import ProcessContext

logger = structlog.get_logger(__name__)


class _Entry:
    """Registry slot for one owner."""

    __slots__ = ("context", "ref", "strong")

    def __init__(self, context: ProcessContext, ref: weakref.ref | None = None, strong: Any = None):
        self.context = context
        self.ref = ref
        self.strong = strong

    def target(self) -> Any:
        if self.ref is not None:
            return self.ref()
        return self.strong


class CorrelationRegistry:
    """Owner → current ``ProcessContext`` table with automatic reclamation."""

    def __init__(self) -> None:
        self._entries: dict[int, _Entry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _lookup(self, owner: Any) -> _Entry | None:
        entry = self._entries.get(id(owner))
        if entry is None or entry.target() is not owner:
            return None
        return entry

    def has_context(self, owner: Any) -> bool:
        """Whether an entry currently exists for ``owner``."""
        return self._lookup(owner) is not None

    def current_context(self, owner: Any) -> ProcessContext | None:
        """Return the owner's current context, or None."""
        entry = self._lookup(owner)
        return entry.context if entry is not None else None

    def begin_top_level(self) -> ProcessContext:
        """Allocate a root context. Top-level calls are not tracked by owner."""
        return ProcessContext()

    def begin_child(self, owner: Any) -> ProcessContext:
        """
        Allocate a context for a non-top-level call on ``owner``.

        The new context's parent is the owner's current context, if any, and
        it replaces that context in the registry.
        """
        existing = self.current_context(owner)
        context = existing.child() if existing is not None else ProcessContext()
        self._store(owner, context)
        return context

    def end(self, owner: Any) -> None:
        """Remove the entry for ``owner``. No-op when there is none."""
        if self._lookup(owner) is not None:
            del self._entries[id(owner)]

    @contextmanager
    def scoped(self, owner: Any) -> Iterator[CorrelationRegistry]:
        """
        Release the owner's entry when the block exits.

        Usage:
            with registry.scoped(owner):
                owner.run()
        """
        try:
            yield self
        finally:
            self.end(owner)

    def _store(self, owner: Any, context: ProcessContext) -> None:
        key = id(owner)
        entry = self._lookup(owner)
        if entry is not None:
            entry.context = context
            return

        try:
            ref = weakref.ref(owner, _make_reaper(self._entries, key))
        except TypeError:
            logger.debug("owner_not_weakrefable", owner_type=type(owner).__name__)
            self._entries[key] = _Entry(context, strong=owner)
            return
        self._entries[key] = _Entry(context, ref=ref)


def _make_reaper(entries: dict[int, _Entry], key: int):
    """Build the weakref callback that drops ``key`` once its owner is collected."""

    def reap(ref: weakref.ref) -> None:
        entry = entries.get(key)
        if entry is not None and entry.ref is ref:
            del entries[key]

    return reap


_default_registry = CorrelationRegistry()


def get_registry() -> CorrelationRegistry:
    """Return the process-wide correlation registry."""
    return _default_registry
