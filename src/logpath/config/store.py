"""
Configuration store.

Holds the single active ``LogConfig`` and applies validated partial updates
according to the merge policy below. The configuration is never mutated in
place: every successful ``set`` swaps in a new frozen snapshot.

Merge policy:
    - ``log_mode`` changes: the endpoint fields are reset. Switching to
      ``single`` adopts the incoming ``endpoint`` or ``DEFAULT_ENDPOINT``;
      switching to ``multiple`` adopts the incoming ``endpoint_params`` or
      an empty tuple.
    - ``log_mode`` unchanged while the store is in ``multiple`` mode:
      incoming ``endpoint_params`` are appended to the existing ones.
      Duplicates are kept.
    - Otherwise incoming fields overlay the existing ones.

Usage:
    store = ConfigStore()
    store.set({"devMode": False, "logMode": "single", "endpoint": "https://logs.example.com"})
    store.get().endpoint  # "https://logs.example.com"
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError

from logpath.config.models import (
    DEFAULT_CONFIG,
    DEFAULT_ENDPOINT,
    ConfigUpdate,
    LogConfig,
    LogMode,
)
from logpath.core.errors import InvalidConfigError

logger = structlog.get_logger(__name__)


def validate_update(partial: Mapping[str, Any] | ConfigUpdate | None = None, **fields: Any) -> ConfigUpdate:
    """
    Validate a partial configuration.

    Raises:
        InvalidConfigError: the first failing field, with the pydantic error chained
    """
    if isinstance(partial, ConfigUpdate) and not fields:
        return partial
    if partial is not None and not isinstance(partial, (Mapping, ConfigUpdate)):
        raise InvalidConfigError("config", partial, "Failed to set config, configuration must be a mapping")

    data: dict[str, Any] = {}
    if isinstance(partial, ConfigUpdate):
        data.update(partial.model_dump(exclude_unset=True))
    elif partial is not None:
        data.update(partial)
    data.update(fields)

    try:
        return ConfigUpdate.model_validate(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        key = ".".join(str(part) for part in first["loc"]) or "config"
        raise InvalidConfigError(
            key,
            first.get("input"),
            f"Failed to set config, invalid config: {key}: {first['msg']}",
            cause=exc,
        ) from exc


def merge_config(existing: LogConfig, update: ConfigUpdate) -> LogConfig:
    """Apply a validated update to ``existing`` and return the new snapshot."""
    # Explicit None means "not given"; it must not replace a stored value.
    incoming: dict[str, Any] = {
        name: getattr(update, name) for name in update.model_fields_set if getattr(update, name) is not None
    }
    if "endpoint_params" in incoming:
        incoming["endpoint_params"] = tuple(incoming["endpoint_params"])

    new_mode = incoming.get("log_mode")
    if new_mode is not None and new_mode != existing.log_mode:
        if new_mode is LogMode.SINGLE:
            incoming["endpoint"] = update.endpoint or DEFAULT_ENDPOINT
        else:
            incoming["endpoint_params"] = tuple(update.endpoint_params or ())
    elif existing.log_mode is LogMode.MULTIPLE and new_mode is not LogMode.SINGLE:
        incoming["endpoint_params"] = existing.endpoint_params + tuple(update.endpoint_params or ())

    return existing.model_copy(update=incoming)


class ConfigStore:
    """
    Holder of the active routing configuration.

    A process-wide instance is returned by ``get_config_store()``; independent
    stores can be created and handed to ``log_path(store=...)`` explicitly.
    """

    def __init__(self, initial: LogConfig = DEFAULT_CONFIG):
        self._initial = initial
        self._config = initial
        self._lock = threading.Lock()

    def get(self) -> LogConfig:
        """Return the current configuration snapshot."""
        return self._config

    def set(self, partial: Mapping[str, Any] | ConfigUpdate | None = None, **fields: Any) -> LogConfig:
        """
        Validate ``partial`` and merge it into the current configuration.

        Raises:
            InvalidConfigError: validation failed, the configuration is unchanged
        """
        update = validate_update(partial, **fields)
        with self._lock:
            self._config = merge_config(self._config, update)
            config = self._config

        logger.debug(
            "config_updated",
            dev_mode=config.dev_mode,
            log_mode=config.log_mode.value,
            endpoints=len(config.endpoint_params) if config.log_mode is LogMode.MULTIPLE else 1,
        )
        return config

    def reset(self) -> LogConfig:
        """Restore the configuration the store was created with."""
        with self._lock:
            self._config = self._initial
        return self._config


_default_store = ConfigStore()


def get_config_store() -> ConfigStore:
    """Return the process-wide configuration store."""
    return _default_store
