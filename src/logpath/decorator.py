"""
The ``log_path`` decorator.

Wraps a function or method so every call emits an Enter record before the
body runs and an Exit or Error record once its outcome is known. Nested
instrumented calls on the same object are correlated through the
correlation registry: each call gets a fresh ``process_id`` and, unless it
is top-level, the ``process_id`` of the previous call on that object as its
``parent_id``.

Usage:
    class OrderService:
        @log_path(is_top_level=True)
        async def place(self, order):
            await self.reserve(order)
            self.charge(order.card)

        @log_path(log_level="debug")
        async def reserve(self, order):
            ...

        @log_path(is_sensitive=True)
        def charge(self, card):
            ...

Design:
- Methods are detected through ``__set_name__``: the receiver is the
  correlation owner and the defining class names the record. Plain
  functions share one module-level owner and are named by their module.
- A call that returns a coroutine gets back a coroutine that awaits it, so
  Enter is still emitted at call time and Exit/Error once it settles. A
  returned future or task is handed back as is, with Exit/Error attached
  as a done-callback.
- Failures emit an Error record and are re-raised unchanged, on both the
  synchronous and the asynchronous path.
- Top-level calls release their owner's registry entry when they finish,
  whatever the outcome.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import types
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeVar

from logpath.config.models import LogLevel
from logpath.config.store import ConfigStore, get_config_store
from logpath.correlation.context import ProcessContext, push_process_context
from logpath.correlation.registry import CorrelationRegistry, get_registry
from logpath.emission.emitter import LogEmitter, get_emitter

# Type variable for decorated functions
F = TypeVar("F", bound=Callable[..., Any])


@dataclass(frozen=True)
class LogPathOptions:
    """Per-function instrumentation options."""

    is_top_level: bool = False
    log_level: LogLevel = LogLevel.INFO
    is_sensitive: bool = False


class _FreeFunctionOwner:
    """Correlation owner shared by instrumented functions that are not methods."""

    def __repr__(self) -> str:
        return "<logpath free-function owner>"


FREE_FUNCTION_OWNER = _FreeFunctionOwner()


class InstrumentedFunction:
    """Callable wrapper produced by ``log_path``. Binds like a function when used as a method."""

    def __init__(
        self,
        func: Callable[..., Any],
        options: LogPathOptions,
        *,
        store: ConfigStore | None = None,
        registry: CorrelationRegistry | None = None,
        emitter: LogEmitter | None = None,
    ):
        functools.update_wrapper(self, func)
        self._func = func
        self.options = options
        self._store = store
        self._registry = registry
        self._emitter = emitter
        self._owner_class: str | None = None

        if inspect.iscoroutinefunction(func):
            inspect.markcoroutinefunction(self)

    def __set_name__(self, owner: type, name: str) -> None:
        self._owner_class = owner.__name__

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        return types.MethodType(self, instance)

    @property
    def is_method(self) -> bool:
        return self._owner_class is not None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        store = self._store if self._store is not None else get_config_store()
        registry = self._registry if self._registry is not None else get_registry()
        emitter = self._emitter if self._emitter is not None else get_emitter()
        opts = self.options

        if self.is_method and args:
            owner, call_args, class_name = args[0], args[1:], self._owner_class
        else:
            owner, call_args, class_name = FREE_FUNCTION_OWNER, args, self._func.__module__
        method_name = self._func.__name__

        config = store.get()
        context = registry.begin_top_level() if opts.is_top_level else registry.begin_child(owner)
        emitter.emit_enter(
            config,
            context,
            class_name,
            method_name,
            opts.log_level,
            call_args,
            kwargs,
            opts.is_sensitive,
        )

        token = push_process_context(context)
        try:
            result = self._func(*args, **kwargs)
        except Exception as e:
            emitter.emit_error(store.get(), context, class_name, method_name, e)
            self._finish(registry, owner)
            raise
        finally:
            token.restore()

        if inspect.iscoroutine(result):
            return self._settle(result, store, registry, emitter, owner, context, class_name, method_name)
        if asyncio.isfuture(result):
            result.add_done_callback(
                functools.partial(self._on_done, store, registry, emitter, owner, context, class_name, method_name)
            )
            return result

        emitter.emit_exit(store.get(), context, class_name, method_name, opts.log_level)
        self._finish(registry, owner)
        return result

    async def _settle(
        self,
        awaitable: Awaitable[Any],
        store: ConfigStore,
        registry: CorrelationRegistry,
        emitter: LogEmitter,
        owner: Any,
        context: ProcessContext,
        class_name: str,
        method_name: str,
    ) -> Any:
        token = push_process_context(context)
        try:
            result = await awaitable
        except Exception as e:
            emitter.emit_error(store.get(), context, class_name, method_name, e)
            raise
        finally:
            token.restore()
            self._finish(registry, owner)

        emitter.emit_exit(store.get(), context, class_name, method_name, self.options.log_level)
        return result

    def _on_done(
        self,
        store: ConfigStore,
        registry: CorrelationRegistry,
        emitter: LogEmitter,
        owner: Any,
        context: ProcessContext,
        class_name: str,
        method_name: str,
        future: asyncio.Future,
    ) -> None:
        """Done-callback for a returned future: emit Exit or Error once it settles."""
        try:
            if future.cancelled():
                emitter.emit_error(store.get(), context, class_name, method_name, asyncio.CancelledError())
            elif future.exception() is not None:
                emitter.emit_error(store.get(), context, class_name, method_name, future.exception())
            else:
                emitter.emit_exit(store.get(), context, class_name, method_name, self.options.log_level)
        finally:
            self._finish(registry, owner)

    def _finish(self, registry: CorrelationRegistry, owner: Any) -> None:
        if self.options.is_top_level:
            registry.end(owner)


def log_path(
    is_top_level: bool = False,
    log_level: LogLevel | str = LogLevel.INFO,
    is_sensitive: bool = False,
    *,
    store: ConfigStore | None = None,
    registry: CorrelationRegistry | None = None,
    emitter: LogEmitter | None = None,
) -> Callable[[F], F]:
    """
    Decorator that logs Enter/Exit/Error records for every call.

    Args:
        is_top_level: Start a new correlation chain instead of continuing the owner's
        log_level: Level of the Enter/Exit records (debug, info, warn, error)
        is_sensitive: Leave the call's arguments out of the Enter record
        store: Configuration store to route with (defaults to the process store)
        registry: Correlation registry (defaults to the process registry)
        emitter: Record emitter (defaults to the process emitter)

    Raises:
        ValueError: ``log_level`` is not a known level
    """
    options = LogPathOptions(
        is_top_level=is_top_level,
        log_level=LogLevel(log_level),
        is_sensitive=is_sensitive,
    )

    def decorator(func: F) -> F:
        return InstrumentedFunction(  # type: ignore[return-value]
            func,
            options,
            store=store,
            registry=registry,
            emitter=emitter,
        )

    return decorator
