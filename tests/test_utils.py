"""Unit tests for utility modules."""

import io
import json
import re

import pytest
from core.errors import BaseIdError, ConfigError, HealthCheckError
from internal.logging import LogLevel, StructuredLogger, get_logger, parse_level
from utils.timestamp import format_timestamp, now_micros, now_millis


class TestTimestamp:
    """Tests for timestamp utilities."""

    def test_format_timestamp_iso_format(self):
        """Timestamp is ISO 8601 format."""
        ts = format_timestamp()
        assert "T" in ts
        assert "Z" in ts or "+" in ts

    def test_format_timestamp_has_microseconds(self):
        """Timestamp includes microseconds."""
        ts = format_timestamp()
        # Should have 6 digits after decimal point
        assert "." in ts
        decimal_part = ts.split(".")[1].split("Z")[0].split("+")[0]
        assert len(decimal_part) == 6

    def test_format_timestamp_fixed_value(self):
        assert format_timestamp(0) == "1970-01-01T00:00:00.000000Z"

    def test_now_micros_returns_int(self):
        """now_micros returns integer."""
        assert isinstance(now_micros(), int)

    def test_now_millis_reasonable_value(self):
        """now_millis returns milliseconds after 2020."""
        millis = now_millis()
        assert isinstance(millis, int)
        assert millis > 1577836800000  # 2020-01-01


class TestErrors:
    """Tests for tracked errors."""

    def test_error_has_tracking_id(self):
        err = BaseIdError("boom")
        assert re.match(r"^err_[0-9A-Za-z]{16}$", err.error_id)
        assert str(err) == f"[{err.error_id}] boom"

    def test_config_error_context(self):
        err = ConfigError("bad", field="verify.key")
        assert err.context == {"field": "verify.key"}

    def test_health_check_error_context(self):
        err = HealthCheckError("bad", component="generator")
        assert err.context["component"] == "generator"


class TestStructuredLogger:
    """Tests for JSON logging."""

    def test_emits_json_line(self):
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.DEBUG, stream)
        logger.info("Issued ids", prefix="user", count=2)
        record = json.loads(stream.getvalue())
        assert record["level"] == "INFO"
        assert record["msg"] == "Issued ids"
        assert record["count"] == 2

    def test_filters_below_level(self):
        stream = io.StringIO()
        logger = StructuredLogger(LogLevel.WARN, stream)
        logger.info("hidden")
        logger.error("shown", error=ValueError("x"))
        lines = stream.getvalue().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["err"] == "x"

    def test_configure_replaces_global(self):
        StructuredLogger.configure(LogLevel.ERROR)
        assert get_logger().level == LogLevel.ERROR
        StructuredLogger.configure()

    @pytest.mark.parametrize("name, level", [
        ("debug", LogLevel.DEBUG),
        ("WARNING", LogLevel.WARN),
        ("warn", LogLevel.WARN),
        ("bogus", LogLevel.INFO),
    ])
    def test_parse_level(self, name, level):
        assert parse_level(name) == level


class TestCrashHandler:
    """Tests for crash handling utilities."""

    def test_configure_sets_path(self):
        """configure() sets crash log path."""
        from utils.crash import configure, _crash_log
        original = _crash_log
        
        configure("/tmp/test_crash.log")
        from utils import crash
        assert crash._crash_log == "/tmp/test_crash.log"
        
        # Restore
        configure(original)

    def test_install_crash_handler(self):
        """install_crash_handler sets sys.excepthook."""
        import sys
        from utils.crash import install_crash_handler, log_crash
        
        original_hook = sys.excepthook
        install_crash_handler()
        
        assert sys.excepthook == log_crash
        
        # Restore
        sys.excepthook = original_hook

    def test_log_crash_writes_record(self, tmp_path, capsys):
        """log_crash writes a crash_ tagged JSON line."""
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"))
        try:
            try:
                raise RuntimeError("kaboom")
            except RuntimeError as exc:
                crash.log_crash(type(exc), exc, exc.__traceback__)
        finally:
            crash.configure(original)

        record = json.loads((tmp_path / "crash.log").read_text().splitlines()[0])
        assert record["id"].startswith("crash_")
        assert record["type"] == "RuntimeError"
        assert record["msg"] == "kaboom"
        assert "CRASH" in capsys.readouterr().err

    def test_crash_id_uses_configured_prefix(self, tmp_path, capsys):
        """Crash records carry ids built from the configured prefix and options."""
        from prefixed import Options
        from utils import crash
        original = crash._crash_log
        crash.configure(str(tmp_path / "crash.log"), prefix="boom", options=Options(delimiter="-"))
        try:
            try:
                raise ValueError("bad")
            except ValueError as exc:
                crash.log_crash(type(exc), exc, exc.__traceback__)
        finally:
            crash.configure(original)

        record = json.loads((tmp_path / "crash.log").read_text().splitlines()[0])
        assert re.match(r"^boom-[0-9A-Za-z]{16}$", record["id"])
        assert crash.new_crash_id().startswith("crash_")
