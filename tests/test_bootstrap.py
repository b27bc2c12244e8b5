"""Tests for init_log_path and init_from_env."""

from __future__ import annotations

import json
import logging

import pytest
from structlog.testing import capture_logs

from logpath import DEFAULT_CONFIG, LogLevel, LogMode, get_config_store, init_from_env, init_log_path


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "LOGPATH_DEV_MODE",
        "LOGPATH_LOG_MODE",
        "LOGPATH_ENDPOINT",
        "LOGPATH_ENDPOINT_PARAMS",
        "LOGPATH_LOG_LEVEL",
        "LOGPATH_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def configure_calls(monkeypatch):
    calls = []
    monkeypatch.setattr("logpath.bootstrap.configure_logging", lambda **kw: calls.append(kw))
    return calls


# ── init_log_path ────────────────────────────────────────────


class TestInitLogPath:
    def test_valid_config_applied_to_process_store(self):
        assert init_log_path({"devMode": False, "logMode": "single", "endpoint": "https://logs.example.com"})
        config = get_config_store().get()
        assert config.dev_mode is False
        assert config.endpoint == "https://logs.example.com"

    def test_keyword_fields(self, store):
        assert init_log_path(store=store, dev_mode=True, log_mode="single", endpoint="https://a.example.com")
        assert store.get().endpoint == "https://a.example.com"

    def test_invalid_config_returns_false_and_keeps_store(self, store):
        before = store.get()
        assert init_log_path({"devMode": "no", "logMode": "single", "endpoint": "x"}, store=store) is False
        assert store.get() is before

    def test_invalid_config_is_logged(self, store):
        with capture_logs() as logs:
            init_log_path({"devMode": False, "logMode": "multiple"}, store=store)

        failures = [entry for entry in logs if entry["event"] == "log_path_init_failed"]
        assert len(failures) == 1
        assert failures[0]["log_level"] == "error"
        assert failures[0]["error_type"] == "InvalidConfigError"
        assert failures[0]["category"] == "CONFIG"

    def test_does_not_raise_on_non_mapping(self, store):
        assert init_log_path("single", store=store) is False  # type: ignore[arg-type]


# ── init_from_env ────────────────────────────────────────────


class TestInitFromEnv:
    def test_defaults_without_env(self, clean_env, store, configure_calls):
        assert init_from_env(store=store)
        assert store.get() == DEFAULT_CONFIG
        assert configure_calls == []

    def test_single_mode(self, clean_env, store, configure_calls):
        clean_env.setenv("LOGPATH_DEV_MODE", "false")
        clean_env.setenv("LOGPATH_ENDPOINT", "https://env.example.com")

        assert init_from_env(store=store)
        config = store.get()
        assert config.dev_mode is False
        assert config.endpoint == "https://env.example.com"

    def test_multiple_mode(self, clean_env, store, configure_calls):
        clean_env.setenv("LOGPATH_DEV_MODE", "false")
        clean_env.setenv("LOGPATH_LOG_MODE", "multiple")
        clean_env.setenv(
            "LOGPATH_ENDPOINT_PARAMS",
            json.dumps([{"logLevel": "error", "endpoint": "https://err.example.com"}]),
        )

        assert init_from_env(store=store)
        config = store.get()
        assert config.log_mode is LogMode.MULTIPLE
        assert config.endpoint_params[0].log_level is LogLevel.ERROR

    def test_logging_options_forwarded(self, clean_env, store, configure_calls):
        clean_env.setenv("LOGPATH_LOG_LEVEL", "debug")
        clean_env.setenv("LOGPATH_LOG_FORMAT", "JSON")

        init_from_env(store=store, configure=True)
        assert configure_calls == [{"level": "DEBUG", "format": "json"}]

    def test_configure_defaults_from_settings(self, clean_env, store, configure_calls):
        assert init_from_env(store=store, configure=True)
        assert configure_calls == [{"level": "INFO", "format": "console"}]

    def test_host_root_handler_survives(self, clean_env, store):
        root = logging.getLogger()
        handler = logging.StreamHandler()
        root.addHandler(handler)
        try:
            assert init_from_env(store=store)
            assert handler in root.handlers
        finally:
            root.removeHandler(handler)

    def test_unparseable_env_returns_false(self, clean_env, store, configure_calls):
        clean_env.setenv("LOGPATH_DEV_MODE", "sometimes")
        assert init_from_env(store=store) is False
        assert store.get() == DEFAULT_CONFIG

    def test_malformed_endpoint_params_returns_false(self, clean_env, store, configure_calls):
        clean_env.setenv("LOGPATH_LOG_MODE", "multiple")
        clean_env.setenv("LOGPATH_ENDPOINT_PARAMS", "[not json")
        assert init_from_env(store=store) is False

    def test_unknown_mode_rejected_by_store(self, clean_env, store, configure_calls):
        clean_env.setenv("LOGPATH_LOG_MODE", "broadcast")
        assert init_from_env(store=store) is False
        assert store.get() == DEFAULT_CONFIG
