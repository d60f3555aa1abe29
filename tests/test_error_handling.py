"""
Tests for error handling classes.

Tests cover:
- ErrorCode values
- SSMLError creation and serialization (to_dict)
- InvalidSSMLError details from a report
- SchemaLoadError code
- Exception inheritance
"""
import pytest

from ssml_ms.services.validation_service import (
    ErrorCode,
    InvalidSSMLError,
    SchemaLoadError,
    SSMLError,
)
from ssml_ms.ssml import validate


class TestErrorCode:
    """Tests for ErrorCode constants."""

    def test_codes(self):
        """All codes are their own names."""
        assert ErrorCode.INVALID_SSML == "INVALID_SSML"
        assert ErrorCode.INVALID_INPUT == "INVALID_INPUT"
        assert ErrorCode.SCHEMA_ERROR == "SCHEMA_ERROR"
        assert ErrorCode.INTERNAL_ERROR == "INTERNAL_ERROR"


class TestSSMLError:
    """Tests for SSMLError base exception."""

    def test_creation_with_message(self):
        """SSMLError should store message."""
        error = SSMLError("Test error message")
        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_default_code_is_internal_error(self):
        """Default code should be INTERNAL_ERROR."""
        assert SSMLError("x").code == ErrorCode.INTERNAL_ERROR

    def test_default_details_is_empty_dict(self):
        """Default details should be empty dict."""
        assert SSMLError("x").details == {}

    def test_to_dict_without_details(self):
        """to_dict omits empty details."""
        d = SSMLError("boom", ErrorCode.INVALID_INPUT).to_dict()
        assert d == {"ok": False, "error": "INVALID_INPUT", "message": "boom"}

    def test_to_dict_with_details(self):
        """to_dict includes details when present."""
        d = SSMLError("boom", details={"length": 5}).to_dict()
        assert d["details"] == {"length": 5}

    def test_can_be_raised_and_caught(self):
        """SSMLError is a regular Exception."""
        with pytest.raises(Exception):
            raise SSMLError("x")


class TestInvalidSSMLError:
    """Tests for the synthesis gate error."""

    def test_details_from_report(self):
        """Errors and warnings are copied into details as lists."""
        report = validate("<speak><badtag>x</badtag>")
        err = InvalidSSMLError("rejected", report)

        assert err.code == ErrorCode.INVALID_SSML
        assert err.report is report
        assert err.details["errors"] == list(report.errors)
        assert err.details["warnings"] == list(report.warnings)
        assert "Unsupported tag: <badtag>" in err.details["warnings"]

    def test_to_dict(self):
        """Serialized form carries the findings."""
        report = validate("")
        d = InvalidSSMLError("rejected", report).to_dict()
        assert d["ok"] is False
        assert d["error"] == "INVALID_SSML"
        assert d["details"]["errors"] == [
            "SSML must start with <speak> tag",
            "SSML must end with </speak> tag",
        ]

    def test_inherits_ssml_error(self):
        """Catchable as SSMLError."""
        with pytest.raises(SSMLError):
            raise InvalidSSMLError("x", validate(""))


class TestSchemaLoadError:
    """Tests for SchemaLoadError."""

    def test_code(self):
        """Code is SCHEMA_ERROR."""
        err = SchemaLoadError("bad schema", {"path": "x.yaml"})
        assert err.code == ErrorCode.SCHEMA_ERROR
        assert err.to_dict()["details"] == {"path": "x.yaml"}
        assert isinstance(err, SSMLError)
