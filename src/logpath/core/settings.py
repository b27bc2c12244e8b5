"""Environment-driven settings for logpath.

``LogPathSettings`` reads the routing configuration and the library's own
logging options from ``LOGPATH_*`` environment variables (and a ``.env``
file when present). It is consumed by ``logpath.bootstrap.init_from_env``.

Variables:
    LOGPATH_DEV_MODE         : true | false
    LOGPATH_LOG_MODE         : single | multiple
    LOGPATH_ENDPOINT         : endpoint URL for single mode (default endpoint when unset)
    LOGPATH_ENDPOINT_PARAMS  : JSON list of {"logLevel": ..., "endpoint": ...}
    LOGPATH_LOG_LEVEL        : level of the library's own diagnostics
    LOGPATH_LOG_FORMAT       : json | console

Examples:
    >>> import os
    >>> os.environ["LOGPATH_DEV_MODE"] = "false"
    >>> LogPathSettings().dev_mode
    False
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from logpath.config.models import DEFAULT_ENDPOINT


class LogPathSettings(BaseSettings):
    """Settings loaded from the environment.

    Fields
    ──────
    dev_mode         : Print records locally instead of delivering them
    log_mode         : Routing mode (single | multiple)
    endpoint         : Single-mode endpoint
    endpoint_params  : Multiple-mode endpoints (raw, validated by the store)
    log_level        : Level for the library's own structlog diagnostics
    log_format       : Renderer for the library's own diagnostics
    """

    model_config = SettingsConfigDict(
        env_prefix="LOGPATH_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Routing ──────────────────────────────────────────────────
    dev_mode: bool = True
    log_mode: str = "single"
    endpoint: str | None = None
    endpoint_params: list[dict[str, Any]] | None = Field(
        default=None,
        description="JSON list of {logLevel, endpoint} objects",
    )

    # ── Observability ────────────────────────────────────────────
    log_level: str = "INFO"
    log_format: str = "console"

    def to_update(self) -> dict[str, Any]:
        """Return the routing fields as a partial configuration for ``ConfigStore.set``."""
        update: dict[str, Any] = {"dev_mode": self.dev_mode, "log_mode": self.log_mode}
        if self.log_mode == "single":
            update["endpoint"] = self.endpoint or DEFAULT_ENDPOINT
        elif self.endpoint_params is not None:
            update["endpoint_params"] = self.endpoint_params
        return update
