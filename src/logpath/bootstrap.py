"""
Initialization entry points.

``init_log_path`` is what an application calls once at startup. It never
raises: an invalid configuration is logged and the current configuration
is kept.

Usage:
    init_log_path(
        dev_mode=os.environ.get("ENV") != "production",
        log_mode="single",
        endpoint="https://logs.example.com",
    )

    # Or from LOGPATH_* environment variables
    init_from_env()
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import structlog
from pydantic import ValidationError
from pydantic_settings import SettingsError

from logpath.config.store import ConfigStore, get_config_store
from logpath.core.errors import InvalidConfigError
from logpath.core.settings import LogPathSettings
from logpath.logging import configure_logging

logger = structlog.get_logger(__name__)


def init_log_path(
    config: Mapping[str, Any] | None = None,
    *,
    store: ConfigStore | None = None,
    **fields: Any,
) -> bool:
    """
    Set the routing configuration.

    Args:
        config: Partial configuration (camelCase or snake_case keys)
        store: Store to configure (defaults to the process store)
        **fields: Configuration fields, merged over ``config``

    Returns:
        True if the configuration was applied, False if it was rejected
    """
    target = store if store is not None else get_config_store()
    try:
        target.set(config, **fields)
    except InvalidConfigError as e:
        logger.error("log_path_init_failed", **e.to_dict())
        return False
    return True


def init_from_env(*, store: ConfigStore | None = None, configure: bool = False) -> bool:
    """
    Initialize from ``LOGPATH_*`` environment variables.

    Args:
        store: Store to configure (defaults to the process store)
        configure: Also configure the library's own diagnostics from the settings
            (off by default so the host application's logging is left alone)

    Returns:
        True if the configuration was applied, False if it was rejected
    """
    try:
        settings = LogPathSettings()
    except (ValidationError, SettingsError) as e:
        logger.error("log_path_init_failed", error=str(e), error_type=type(e).__name__)
        return False

    if configure:
        configure_logging(level=settings.log_level.upper(), format=settings.log_format.lower())
    return init_log_path(settings.to_update(), store=store)
