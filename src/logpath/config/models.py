"""
Routing configuration models.

``LogConfig`` is the immutable snapshot held by a ``ConfigStore``.
``ConfigUpdate`` validates the partial configuration passed to
``ConfigStore.set``. Both accept camelCase (``devMode``, ``logMode``,
``endpointParams``, ``logLevel``) as well as snake_case keys.

Example::

    config = LogConfig(
        dev_mode=False,
        log_mode=LogMode.MULTIPLE,
        endpoint_params=(
            EndpointParam(log_level=LogLevel.ERROR, endpoint="https://errors.example.com"),
            EndpointParam(log_level=LogLevel.INFO, endpoint="https://info.example.com"),
        ),
    )
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, StrictStr, model_validator
from pydantic.alias_generators import to_camel


class LogLevel(str, Enum):
    """Log levels an instrumented call can be recorded at."""

    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"


class LogMode(str, Enum):
    """Routing mode for remote delivery."""

    SINGLE = "single"  # Every record goes to one endpoint
    MULTIPLE = "multiple"  # Records go to the endpoints registered for their level


DEFAULT_ENDPOINT = "http://default-endpoint.com"


class EndpointParam(BaseModel):
    """An endpoint registered for one log level. A level may have several endpoints."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    log_level: LogLevel
    endpoint: StrictStr


class LogConfig(BaseModel):
    """
    Active routing configuration.

    Only the endpoint field matching ``log_mode`` is consulted when routing;
    the other one may hold a value left over from an earlier mode.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    dev_mode: bool
    log_mode: LogMode
    endpoint: str | None = None
    endpoint_params: tuple[EndpointParam, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return the configuration in its camelCase wire form."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


DEFAULT_CONFIG = LogConfig(dev_mode=True, log_mode=LogMode.SINGLE, endpoint=DEFAULT_ENDPOINT)


class ConfigUpdate(BaseModel):
    """
    A validated partial configuration.

    ``dev_mode`` must be a real bool and ``log_mode`` a known mode. Single
    mode requires a string ``endpoint``; multiple mode requires an
    ``endpoint_params`` sequence of valid ``EndpointParam`` entries.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    dev_mode: StrictBool
    log_mode: LogMode
    endpoint: StrictStr | None = None
    endpoint_params: list[EndpointParam] | None = None

    @model_validator(mode="after")
    def _check_endpoint_shape(self) -> ConfigUpdate:
        if self.log_mode is LogMode.SINGLE and self.endpoint is None:
            raise ValueError("endpoint is required when logMode is 'single'")
        if self.log_mode is LogMode.MULTIPLE and self.endpoint_params is None:
            raise ValueError("endpointParams is required when logMode is 'multiple'")
        return self
