"""Tests for the numeric logging level system."""
from __future__ import annotations

import io
import json
import logging
import os
import tempfile
from pathlib import Path
from unittest.mock import patch


class TestLogLevelEnum:
    """Test LogLevel enum values."""

    def test_level_enum_values(self):
        """Verify LogLevel enum has correct numeric values."""
        from ssml_ms.core.logging import LogLevel

        assert LogLevel.MINIMAL == 1
        assert LogLevel.NORMAL == 2
        assert LogLevel.VERBOSE == 3
        assert LogLevel.DEBUG == 4

    def test_level_enum_ordering(self):
        """Verify LogLevel enum supports comparison."""
        from ssml_ms.core.logging import LogLevel

        assert LogLevel.MINIMAL < LogLevel.NORMAL < LogLevel.VERBOSE < LogLevel.DEBUG


class TestLevelCoercion:
    """Test level coercion from various input types."""

    def test_level_from_int(self):
        """Test coercion from integers 1-4."""
        from ssml_ms.core.logging import LogLevel, coerce_level

        assert coerce_level(1) == LogLevel.MINIMAL
        assert coerce_level(2) == LogLevel.NORMAL
        assert coerce_level(3) == LogLevel.VERBOSE
        assert coerce_level(4) == LogLevel.DEBUG

    def test_level_from_string_names(self):
        """Test coercion from level name strings."""
        from ssml_ms.core.logging import LogLevel, coerce_level

        assert coerce_level("MINIMAL") == LogLevel.MINIMAL
        assert coerce_level("minimal") == LogLevel.MINIMAL
        assert coerce_level("normal") == LogLevel.NORMAL
        assert coerce_level("VERBOSE") == LogLevel.VERBOSE
        assert coerce_level("DEBUG") == LogLevel.DEBUG

    def test_level_from_numeric_string(self):
        """Test coercion from numeric strings."""
        from ssml_ms.core.logging import LogLevel, coerce_level

        assert coerce_level("1") == LogLevel.MINIMAL
        assert coerce_level("3") == LogLevel.VERBOSE

    def test_level_from_python_levels(self):
        """Python level names and numbers map onto the four levels."""
        from ssml_ms.core.logging import LogLevel, coerce_level

        assert coerce_level("INFO") == LogLevel.NORMAL
        assert coerce_level("WARNING") == LogLevel.MINIMAL
        assert coerce_level(logging.WARNING) == LogLevel.MINIMAL
        assert coerce_level(logging.INFO) == LogLevel.NORMAL

    def test_invalid_level_defaults_to_normal(self):
        """Test that invalid values default to NORMAL."""
        from ssml_ms.core.logging import LogLevel, coerce_level

        assert coerce_level("invalid") == LogLevel.NORMAL
        assert coerce_level(None) == LogLevel.NORMAL


class TestLevelFiltering:
    """Test that log messages are filtered by level."""

    def test_level_filtering_minimal(self):
        """Messages above MINIMAL level are suppressed."""
        from ssml_ms.core.logging import configure_logging, debug, error, get_logger, info

        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=1, force=True)
            log = get_logger("test_minimal")

            info(log, "info message")
            error(log, "error message")
            debug(log, "debug message")

        output = captured.getvalue()
        assert "error message" in output
        assert "info message" not in output
        assert "debug message" not in output

    def test_level_filtering_normal(self):
        """Messages above NORMAL level are suppressed."""
        from ssml_ms.core.logging import configure_logging, debug, get_logger, info, verbose

        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=2, force=True)
            log = get_logger("test_normal")

            info(log, "info message")
            verbose(log, "verbose message")
            debug(log, "debug message")

        output = captured.getvalue()
        assert "info message" in output
        assert "verbose message" not in output
        assert "debug message" not in output

    def test_level_filtering_debug(self):
        """DEBUG level shows all messages."""
        from ssml_ms.core.logging import configure_logging, debug, get_logger, info, trace, verbose

        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=4, force=True)
            log = get_logger("test_debug")

            info(log, "info message")
            verbose(log, "verbose message")
            debug(log, "debug message")
            trace(log, "trace message")

        output = captured.getvalue()
        assert "info message" in output
        assert "verbose message" in output
        assert "debug message" in output
        assert "trace message" in output

    def test_validator_logs_at_verbose(self):
        """Each validation emits one verbose line with counts only."""
        from ssml_ms.core.logging import configure_logging
        from ssml_ms.ssml import validate

        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=3, force=True)
            validate("<speak>secret words</speak>")

        output = captured.getvalue()
        assert "ssml_validated" in output
        assert "secret words" not in output


class TestRequestIdPropagation:
    """Test that request_id is included in logs."""

    def test_request_id_in_log_output(self):
        """Request ID appears in console output."""
        from ssml_ms.core.logging import configure_logging, get_logger, info, set_request_id

        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=2, force=True)
            set_request_id("test-rid-123")
            log = get_logger("test_rid")
            info(log, "message with rid")

        assert "test-rid-123" in captured.getvalue()


class TestEnvOverride:
    """Test environment variable overrides."""

    def test_env_override_log_level(self):
        """SSML_MS_LOG_LEVEL environment variable overrides config."""
        from ssml_ms.core.logging import LogLevel, configure_logging, get_level

        with patch.dict(os.environ, {"SSML_MS_LOG_LEVEL": "3"}):
            configure_logging(force=True)
            assert get_level() == LogLevel.VERBOSE

        configure_logging(level=2, force=True)

    def test_settings_file_level(self, tmp_path):
        """The logging section of SSML_MS_SETTINGS is read."""
        from ssml_ms.core.logging import LogLevel, configure_logging, get_level

        settings = tmp_path / "settings.yaml"
        settings.write_text("logging:\n  level: 4\n", encoding="utf-8")

        env = {k: v for k, v in os.environ.items() if k != "SSML_MS_LOG_LEVEL"}
        env["SSML_MS_SETTINGS"] = str(settings)
        with patch.dict(os.environ, env, clear=True):
            configure_logging(force=True)
            assert get_level() == LogLevel.DEBUG

        configure_logging(level=2, force=True)


class TestJsonlOutput:
    """Test JSONL file output."""

    def test_jsonl_output_format(self):
        """JSONL file contains valid JSON lines."""
        from ssml_ms.core.logging import configure_logging, get_logger, info

        with tempfile.TemporaryDirectory() as tmpdir:
            jsonl_path = Path(tmpdir) / "test.jsonl"

            with patch.dict(os.environ, {
                "SSML_MS_LOG_DIR": tmpdir,
                "SSML_MS_JSONL_FILE": "test.jsonl",
            }):
                configure_logging(level=2, force=True)
                log = get_logger("test_jsonl")
                info(log, "test message", key="value")

                root = logging.getLogger()
                for handler in root.handlers:
                    handler.flush()
                    handler.close()
                root.handlers = []

            assert jsonl_path.exists()
            lines = [line for line in jsonl_path.read_text().strip().split("\n") if line]
            assert len(lines) >= 1

            for line in lines:
                data = json.loads(line)
                assert "ts" in data
                assert "level" in data
                assert "message" in data
                if data["message"] == "test message":
                    assert data.get("extra", {}).get("key") == "value"
                    break

        configure_logging(level=2, force=True)


class TestGetLevelName:
    """Test get_level_name function."""

    def test_get_level_name(self):
        """get_level_name returns correct string."""
        from ssml_ms.core.logging import configure_logging, get_level_name

        configure_logging(level=1, force=True)
        assert get_level_name() == "MINIMAL"

        configure_logging(level=3, force=True)
        assert get_level_name() == "VERBOSE"

        configure_logging(level=2, force=True)
        assert get_level_name() == "NORMAL"
