"""
logpath - correlated entry/exit/error logging for function calls.

Decorate methods with ``log_path`` and every call emits structured Enter,
Exit and Error records. Nested calls on the same object are linked through
``parent_id`` without any context being passed by the caller.

Usage:
    from logpath import init_log_path, log_path

    init_log_path(dev_mode=False, log_mode="single", endpoint="https://logs.example.com")

    class Checkout:
        @log_path(is_top_level=True)
        def run(self, cart):
            return self.total(cart)

        @log_path(log_level="debug")
        def total(self, cart):
            return sum(item.price for item in cart)

Modules:
    config       : routing configuration store and models
    correlation  : process contexts and the owner registry
    emission     : records, routing and HTTP delivery
    decorator    : the ``log_path`` decorator
    bootstrap    : ``init_log_path`` / ``init_from_env``
    logging      : structured diagnostics for the library itself
"""

from logpath.bootstrap import init_from_env, init_log_path
from logpath.config import (
    DEFAULT_CONFIG,
    ConfigStore,
    EndpointParam,
    LogConfig,
    LogLevel,
    LogMode,
    get_config_store,
)
from logpath.core.errors import ConfigError, InvalidConfigError, LogPathError, TransportError
from logpath.correlation import (
    CorrelationRegistry,
    ProcessContext,
    get_process_context,
    get_registry,
)
from logpath.decorator import InstrumentedFunction, LogPathOptions, log_path
from logpath.emission import HttpTransport, LogAction, LogEmitter, LogRecord, get_emitter

__version__ = "1.0.0"

__all__ = [
    # Entry points
    "init_log_path",
    "init_from_env",
    "log_path",
    "LogPathOptions",
    "InstrumentedFunction",
    # Configuration
    "ConfigStore",
    "get_config_store",
    "LogConfig",
    "EndpointParam",
    "LogLevel",
    "LogMode",
    "DEFAULT_CONFIG",
    # Correlation
    "ProcessContext",
    "CorrelationRegistry",
    "get_registry",
    "get_process_context",
    # Emission
    "LogAction",
    "LogRecord",
    "LogEmitter",
    "HttpTransport",
    "get_emitter",
    # Errors
    "LogPathError",
    "ConfigError",
    "InvalidConfigError",
    "TransportError",
]
