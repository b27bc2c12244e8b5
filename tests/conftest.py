"""
Shared pytest fixtures for logpath tests.

This module provides:
- Isolated configuration stores and correlation registries
- A recording transport that captures deliveries instead of sending them
- An emitter wired to an in-memory output stream

Usage:
    def test_something(store, registry, emitter, transport):
        ...
"""

import io
import sys
from pathlib import Path
from typing import Any, Generator

import pytest

# Ensure logpath package is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from logpath.config import ConfigStore, get_config_store
from logpath.correlation import CorrelationRegistry
from logpath.emission import LogEmitter


class RecordingTransport:
    """Transport that keeps every (endpoint, payload) pair it is given."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, dict[str, Any]]] = []

    def send(self, endpoint: str, payload: dict[str, Any]) -> None:
        self.sent.append((endpoint, payload))

    def endpoints(self) -> list[str]:
        return [endpoint for endpoint, _ in self.sent]

    def payloads(self) -> list[dict[str, Any]]:
        return [payload for _, payload in self.sent]


class FailingTransport:
    """Transport whose every send raises."""

    def send(self, endpoint: str, payload: dict[str, Any]) -> None:
        raise ConnectionError(f"cannot reach {endpoint}")


# =============================================================================
# Isolation Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def reset_default_store() -> Generator[None, None, None]:
    """Restore the process-wide store so no test leaks configuration into another."""
    get_config_store().reset()
    yield
    get_config_store().reset()


@pytest.fixture
def store() -> ConfigStore:
    """Fresh store holding the default configuration."""
    return ConfigStore()


@pytest.fixture
def registry() -> CorrelationRegistry:
    """Fresh, empty correlation registry."""
    return CorrelationRegistry()


# =============================================================================
# Emission Fixtures
# =============================================================================


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def failing_transport() -> FailingTransport:
    return FailingTransport()


@pytest.fixture
def output() -> io.StringIO:
    """In-memory stream receiving dev-mode lines."""
    return io.StringIO()


@pytest.fixture
def emitter(transport: RecordingTransport, output: io.StringIO) -> LogEmitter:
    return LogEmitter(transport=transport, output=output)


@pytest.fixture
def remote_store(store: ConfigStore) -> ConfigStore:
    """Store configured for delivery to a single remote endpoint."""
    store.set({"devMode": False, "logMode": "single", "endpoint": "https://logs.example.com"})
    return store


@pytest.fixture
def multi_store(store: ConfigStore) -> ConfigStore:
    """Store configured with per-level endpoints, two of them for ``warn``."""
    store.set(
        {
            "devMode": False,
            "logMode": "multiple",
            "endpointParams": [
                {"logLevel": "info", "endpoint": "https://info.example.com"},
                {"logLevel": "warn", "endpoint": "https://warn-a.example.com"},
                {"logLevel": "warn", "endpoint": "https://warn-b.example.com"},
                {"logLevel": "error", "endpoint": "https://error.example.com"},
            ],
        }
    )
    return store
