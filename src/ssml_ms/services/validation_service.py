"""
SSMLService - Validation Gate in Front of Synthesis.

The service owns one immutable schema and one SSMLValidator built from
configuration, and is the single place callers go to check a document
before it is sent to a synthesis engine.

Pipeline:
    text -> prepare_document (wrap plain text) -> validate -> gate

Gate Contract:
    - errors block: ensure_synthesizable() raises InvalidSSMLError
    - warnings never block: the report is returned and synthesis may proceed

Error Handling:
    - SSMLError: Base exception with standardized error codes
    - InvalidSSMLError: Document failed validation (INVALID_SSML)
    - SchemaLoadError: Configured schema could not be built (SCHEMA_ERROR)

Example:
    >>> from ssml_ms.core.config import Settings
    >>> from ssml_ms.services import SSMLService
    >>>
    >>> service = SSMLService(Settings(raw={}))
    >>> report = service.ensure_synthesizable("<speak>Hello</speak>")
    >>> report.valid
    True
"""
from __future__ import annotations

import threading
import time
from typing import Any, Dict, Optional

from ssml_ms import __version__
from ssml_ms.core.config import SSMLServiceConfig, Settings
from ssml_ms.core.logging import debug, fail, get_logger, info, success, warn
from ssml_ms.core.metrics import metrics
from ssml_ms.ssml.schema import Schema, SchemaDefinitionError, get_schema, load_schema_file
from ssml_ms.ssml.validator import SSMLValidator, ValidationLimits, ValidationReport
from ssml_ms.utils.text import preview, wrap_plain_text
from ssml_ms.utils.timeit import timeit

_LOG = get_logger("ssml-ms.service")


# =============================================================================
# Error Codes and Exceptions
# =============================================================================

class ErrorCode:
    """Standardized error codes for API responses."""
    INVALID_SSML = "INVALID_SSML"       # Document has validation errors
    INVALID_INPUT = "INVALID_INPUT"     # Request body unusable
    SCHEMA_ERROR = "SCHEMA_ERROR"       # Configured schema failed to load
    INTERNAL_ERROR = "INTERNAL_ERROR"   # Unexpected error


class SSMLError(Exception):
    """
    Base exception for service errors.

    Attributes:
        message: Human-readable error message.
        code: Error code from ErrorCode.
        details: Optional dictionary with additional context.
    """
    def __init__(self, message: str, code: str = ErrorCode.INTERNAL_ERROR, details: Optional[Dict] = None):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to standardized error response dict for API."""
        result = {
            "ok": False,
            "error": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class InvalidSSMLError(SSMLError):
    """Raised by the synthesis gate when a document has validation errors."""
    def __init__(self, message: str, report: ValidationReport):
        super().__init__(
            message,
            ErrorCode.INVALID_SSML,
            {"errors": list(report.errors), "warnings": list(report.warnings)},
        )
        self.report = report


class SchemaLoadError(SSMLError):
    """Raised when the configured schema cannot be built."""
    def __init__(self, message: str, details: Optional[Dict] = None):
        super().__init__(message, ErrorCode.SCHEMA_ERROR, details)


# =============================================================================
# Service
# =============================================================================

def build_schema(config: SSMLServiceConfig) -> Schema:
    """
    Resolve the schema named by configuration.

    A schema file path wins over the profile name.

    Raises:
        SchemaLoadError: Unknown profile, missing file or malformed table.
    """
    try:
        if config.schema.path:
            return load_schema_file(config.schema.path)
        return get_schema(config.schema.profile)
    except (FileNotFoundError, SchemaDefinitionError) as e:
        raise SchemaLoadError(
            str(e),
            {"profile": config.schema.profile, "path": config.schema.path},
        ) from e


def build_limits(config: SSMLServiceConfig) -> ValidationLimits:
    return ValidationLimits(
        long_segment_max_chars=config.validation.long_segment_max_chars,
        max_nesting_depth=config.validation.max_nesting_depth,
        standard_per_million=config.pricing.standard_per_million,
        neural_per_million=config.pricing.neural_per_million,
    )


class SSMLService:
    """
    Validation service shared by the API and synthesis callers.

    The schema and validator are built once in the constructor and never
    mutated, so one instance serves concurrent requests without locking.
    """

    def __init__(self, settings: Settings):
        """
        Args:
            settings: Application settings loaded from YAML/environment.

        Raises:
            ConfigValidationError: Invalid configuration values.
            SchemaLoadError: Schema profile/file could not be loaded.
        """
        self._settings = settings
        self._config = settings.get_service_config()
        self._schema = build_schema(self._config)
        self._validator = SSMLValidator(self._schema, build_limits(self._config))
        self._start_time = time.time()

        info(
            _LOG, "service_ready",
            schema=self._schema.name,
            tags=len(self._schema.supported_tags),
        )

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def config(self) -> SSMLServiceConfig:
        return self._config

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def validator(self) -> SSMLValidator:
        return self._validator

    def prepare_document(self, text: str) -> str:
        """Wrap plain text in the root element; SSML passes through."""
        document = wrap_plain_text(text, self._schema.root_tag)
        debug(_LOG, "document_prepared", wrapped=document != text.strip(), chars=len(document))
        return document

    def validate(self, document: Optional[str], request_id: Optional[str] = None) -> ValidationReport:
        """
        Validate a document and record metrics.

        Never raises for malformed documents.
        """
        with timeit("validate") as t:
            report = self._validator.validate(document)

        metrics.record_validation(
            valid=report.valid,
            errors=len(report.errors),
            warnings=len(report.warnings),
            characters=report.info.character_count,
            duration=t.seconds,
        )

        fields = dict(
            valid=report.valid,
            errors=len(report.errors),
            warnings=len(report.warnings),
            chars=report.info.character_count,
            seconds=t.seconds,
        )
        if request_id:
            fields["rid"] = request_id
        if report.valid:
            info(_LOG, "ssml_checked", **fields)
        else:
            warn(
                _LOG, "ssml_invalid",
                preview=preview(document or "", self._config.logging.text_preview_chars),
                **fields,
            )
        return report

    def ensure_synthesizable(self, document: Optional[str], request_id: Optional[str] = None) -> ValidationReport:
        """
        Gate a document before synthesis.

        Returns:
            The report when it has no errors (warnings allowed).

        Raises:
            InvalidSSMLError: The report has one or more errors.
        """
        report = self.validate(document, request_id)
        if not report.valid:
            metrics.record_rejection("invalid_ssml")
            fail(_LOG, "ssml_rejected", errors=len(report.errors), warnings=len(report.warnings))
            raise InvalidSSMLError(
                f"SSML failed validation with {len(report.errors)} error(s)",
                report,
            )
        success(_LOG, "ssml_accepted", warnings=len(report.warnings))
        return report

    def get_schema_info(self) -> Dict[str, Any]:
        """Schema tables in display form."""
        return self._schema.to_dict()

    def get_health_info(self) -> Dict[str, Any]:
        return {
            "ok": True,
            "version": __version__,
            "schema": self._schema.name,
            "supported_tags": len(self._schema.supported_tags),
            "uptime_s": round(time.time() - self._start_time, 3),
        }


# =============================================================================
# Process-wide instance
# =============================================================================

_service: Optional[SSMLService] = None
_service_lock = threading.Lock()


def get_service(settings: Settings) -> SSMLService:
    """Return the shared SSMLService, creating it on first call."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = SSMLService(settings)
    return _service


def reset_service() -> None:
    """Drop the shared instance (tests, settings reload)."""
    global _service
    with _service_lock:
        _service = None
