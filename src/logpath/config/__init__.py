"""
Routing configuration for logpath.

Usage:
    from logpath.config import get_config_store

    store = get_config_store()
    store.set(dev_mode=False, log_mode="single", endpoint="https://logs.example.com")
    config = store.get()
"""

from logpath.config.models import (
    DEFAULT_CONFIG,
    DEFAULT_ENDPOINT,
    ConfigUpdate,
    EndpointParam,
    LogConfig,
    LogLevel,
    LogMode,
)
from logpath.config.store import ConfigStore, get_config_store, merge_config, validate_update

__all__ = [
    # Models
    "LogLevel",
    "LogMode",
    "EndpointParam",
    "LogConfig",
    "ConfigUpdate",
    "DEFAULT_CONFIG",
    "DEFAULT_ENDPOINT",
    # Store
    "ConfigStore",
    "get_config_store",
    "validate_update",
    "merge_config",
]
