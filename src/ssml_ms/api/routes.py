"""
SSML API Routes.

Endpoints:
    POST /v1/ssml/validate  - Full validation report (always 200)
    POST /v1/ssml/check     - Synthesis gate (200 if accepted, 422 if blocked)
    POST /v1/ssml/prepare   - Wrap plain text and validate the result
    GET  /v1/ssml/schema    - Active schema tables
    GET  /health            - Health check for load balancers and probes
    GET  /metrics           - Prometheus metrics

Error Handling:
    Errors are returned as JSON with standardized format:
    {
        "ok": false,
        "error": "<ERROR_CODE>",
        "message": "<human readable message>",
        "details": {...}
    }

    HTTP status codes are mapped from SSMLError codes:
        - INVALID_SSML -> 422 Unprocessable Entity
        - INVALID_INPUT -> 400 Bad Request
        - SCHEMA_ERROR -> 500 Internal Server Error

Example Usage:
    >>> import httpx
    >>> r = httpx.post(
    ...     "http://localhost:8000/v1/ssml/validate",
    ...     json={"ssml": "<speak>Hello</speak>"},
    ... )
    >>> r.json()["valid"]
    True
"""
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse

from ssml_ms.api.dependencies import get_validation_service
from ssml_ms.api.schemas import (
    PrepareRequest,
    PrepareResponse,
    ValidateRequest,
    ValidationReportModel,
)
from ssml_ms.core.logging import error, get_logger, set_request_id
from ssml_ms.core.metrics import metrics
from ssml_ms.services.validation_service import (
    ErrorCode,
    SSMLError,
    SSMLService,
)

router = APIRouter()

_LOG = get_logger("ssml-ms.api")

_STATUS_MAP = {
    ErrorCode.INVALID_SSML: 422,
    ErrorCode.INVALID_INPUT: 400,
    ErrorCode.SCHEMA_ERROR: 500,
}


def _new_request_id() -> str:
    rid = str(uuid.uuid4())[:12]
    set_request_id(rid)
    return rid


def _error_response(err: SSMLError, rid: str) -> JSONResponse:
    """Standardized JSON error response from an SSMLError."""
    content = err.to_dict()
    content["request_id"] = rid
    return JSONResponse(
        status_code=_STATUS_MAP.get(err.code, 500),
        content=content,
        headers={"X-Request-Id": rid},
    )


def _internal_error(rid: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "ok": False,
            "error": ErrorCode.INTERNAL_ERROR,
            "message": "Internal server error",
            "request_id": rid,
        },
        headers={"X-Request-Id": rid},
    )


def ssml_error_handler(request: Request, exc: SSMLError) -> JSONResponse:
    """
    App-level handler for SSMLError raised outside a route body.

    Dependencies run before the route, so a schema that fails to load in
    get_validation_service lands here instead of in the route's try block.
    """
    rid = _new_request_id()
    error(_LOG, "request_failed", rid=rid, code=exc.code, path=request.url.path)
    return _error_response(exc, rid)


def _check_size(service: SSMLService, document: str) -> None:
    """Reject documents over validation.max_document_chars."""
    limit = service.config.validation.max_document_chars
    if len(document) > limit:
        metrics.record_rejection("too_large")
        raise SSMLError(
            f"Document exceeds {limit} characters",
            ErrorCode.INVALID_INPUT,
            {"length": len(document), "max_document_chars": limit},
        )


@router.post("/v1/ssml/validate", response_model=ValidationReportModel)
def validate_ssml(
    req: ValidateRequest,
    service: SSMLService = Depends(get_validation_service),
):
    """
    Validate a document and return the full report.

    A malformed document is not an HTTP error: the report comes back with
    200 and valid=false.

    Example:
        curl -X POST http://localhost:8000/v1/ssml/validate \\
            -H "Content-Type: application/json" \\
            -d '{"ssml": "<speak>Hello</speak>"}'
    """
    rid = _new_request_id()
    try:
        _check_size(service, req.ssml)
        report = service.validate(req.ssml, rid)
    except SSMLError as e:
        return _error_response(e, rid)
    except Exception as e:
        error(_LOG, "validate_failed", rid=rid, err=type(e).__name__)
        return _internal_error(rid)

    body = report.to_dict()
    body["request_id"] = rid
    return JSONResponse(content=body, headers={"X-Request-Id": rid})


@router.post("/v1/ssml/check")
def check_ssml(
    req: ValidateRequest,
    service: SSMLService = Depends(get_validation_service),
):
    """
    Synthesis gate.

    Returns:
        200 with the report when the document has no errors (warnings allowed).
        422 with INVALID_SSML and details.errors / details.warnings otherwise.
    """
    rid = _new_request_id()
    try:
        _check_size(service, req.ssml)
        report = service.ensure_synthesizable(req.ssml, rid)
    except SSMLError as e:
        return _error_response(e, rid)
    except Exception as e:
        error(_LOG, "check_failed", rid=rid, err=type(e).__name__)
        return _internal_error(rid)

    body = report.to_dict()
    body["request_id"] = rid
    return JSONResponse(content=body, headers={"X-Request-Id": rid})


@router.post("/v1/ssml/prepare", response_model=PrepareResponse)
def prepare_ssml(
    req: PrepareRequest,
    service: SSMLService = Depends(get_validation_service),
):
    """Wrap plain text in <speak> (escaping XML characters) and validate it."""
    rid = _new_request_id()
    try:
        document = service.prepare_document(req.text)
        _check_size(service, document)
        report = service.validate(document, rid)
    except SSMLError as e:
        return _error_response(e, rid)
    except Exception as e:
        error(_LOG, "prepare_failed", rid=rid, err=type(e).__name__)
        return _internal_error(rid)

    report_body = report.to_dict()
    report_body["request_id"] = rid
    return JSONResponse(
        content={"ssml": document, "report": report_body},
        headers={"X-Request-Id": rid},
    )


@router.get("/v1/ssml/schema")
def schema_info(service: SSMLService = Depends(get_validation_service)):
    """Supported tags, required attributes and attribute constraints."""
    return service.get_schema_info()


@router.get("/health")
def health(service: SSMLService = Depends(get_validation_service)):
    """Health check for load balancers and orchestration."""
    return service.get_health_info()


@router.get("/metrics")
def prometheus_metrics():
    """Prometheus text format metrics."""
    content, content_type = metrics.get_metrics_response()
    return Response(content=content, media_type=content_type)
