"""Tests for log record builders and message formatting."""

from __future__ import annotations

import re
from datetime import UTC, datetime

from logpath.config import LogLevel
from logpath.correlation import ProcessContext
from logpath.emission import (
    LogAction,
    describe_error,
    enter_record,
    error_record,
    exit_record,
    format_message,
)

MOMENT = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=UTC)


class CustomFailure(Exception):
    pass


# ── format_message ───────────────────────────────────────────


class TestFormatMessage:
    def test_without_parent(self):
        ctx = ProcessContext(process_id="p-1")
        msg = format_message(LogLevel.INFO, ctx, "Orders", "place", LogAction.ENTER, MOMENT)
        assert msg == "2024-01-02T03:04:05.678Z [info: p-1]: Enter Orders.place"

    def test_with_parent(self):
        ctx = ProcessContext(process_id="p-2", parent_id="p-1")
        msg = format_message(LogLevel.DEBUG, ctx, "Orders", "reserve", LogAction.EXIT, MOMENT)
        assert msg == "2024-01-02T03:04:05.678Z [debug: p-1 > p-2]: Exit Orders.reserve"

    def test_defaults_to_now(self):
        msg = format_message(LogLevel.WARN, ProcessContext(process_id="p"), "C", "m", LogAction.ERROR)
        assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z \[warn: p\]: Error C\.m$", msg)


# ── describe_error ───────────────────────────────────────────


class TestDescribeError:
    def test_exception_message(self):
        assert describe_error(ValueError("bad value")) == "bad value"

    def test_exception_without_message_uses_type(self):
        assert describe_error(CustomFailure()) == "CustomFailure"

    def test_non_exception_uses_text(self):
        assert describe_error(42) == "42"
        assert describe_error("plain") == "plain"


# ── Builders ─────────────────────────────────────────────────


class TestEnterRecord:
    def test_includes_args(self):
        ctx = ProcessContext()
        record = enter_record(ctx, "Orders", "place", LogLevel.INFO, (1, "two"), {"rush": True})

        assert record.action is LogAction.ENTER
        assert record.args == [1, "two"]
        assert record.kwargs == {"rush": True}
        assert record.process_id == ctx.process_id
        assert record.error is None

    def test_sensitive_omits_args(self):
        record = enter_record(ProcessContext(), "Vault", "open", LogLevel.INFO, ("secret",), {"pin": 1234}, True)
        assert record.args is None
        assert record.kwargs is None
        assert "args" not in record.to_dict()
        assert "kwargs" not in record.to_dict()

    def test_no_args_gives_empty_list(self):
        record = enter_record(ProcessContext(), "C", "m", LogLevel.INFO)
        assert record.args == []
        assert record.kwargs is None

    def test_timestamp_is_epoch_millis(self):
        before = int(datetime.now(UTC).timestamp() * 1000)
        record = enter_record(ProcessContext(), "C", "m", LogLevel.INFO)
        after = int(datetime.now(UTC).timestamp() * 1000)
        assert before <= record.timestamp <= after


class TestExitRecord:
    def test_exit_has_no_args_or_error(self):
        ctx = ProcessContext().child()
        record = exit_record(ctx, "C", "m", LogLevel.DEBUG)

        assert record.action is LogAction.EXIT
        assert record.log_level is LogLevel.DEBUG
        assert record.parent_id == ctx.parent_id
        assert record.args is None
        assert record.error is None
        assert record.message.endswith("Exit C.m")


class TestErrorRecord:
    def test_forces_error_level(self):
        record = error_record(ProcessContext(), "C", "m", RuntimeError("boom"))
        assert record.log_level is LogLevel.ERROR
        assert record.action is LogAction.ERROR
        assert record.error == "boom"
        assert "[error:" in record.message
        assert record.message.endswith("Error C.m")


# ── Wire form ────────────────────────────────────────────────


class TestWireForm:
    def test_to_dict_keys(self):
        ctx = ProcessContext(process_id="p-2", parent_id="p-1")
        data = enter_record(ctx, "Orders", "place", LogLevel.INFO, ("a",)).to_dict()

        assert data["processId"] == "p-2"
        assert data["parentId"] == "p-1"
        assert data["logLevel"] == "info"
        assert data["className"] == "Orders"
        assert data["methodName"] == "place"
        assert data["action"] == "Enter"
        assert data["args"] == ["a"]
        assert isinstance(data["timestamp"], int)

    def test_to_dict_omits_absent_parent(self):
        data = exit_record(ProcessContext(), "C", "m", LogLevel.INFO).to_dict()
        assert "parentId" not in data
        assert "error" not in data
