"""
API Request/Response Schemas.

Models:
    ValidateRequest: Input for /v1/ssml/validate and /v1/ssml/check
    PrepareRequest: Input for /v1/ssml/prepare
    ValidationReportModel: Report body returned by /v1/ssml/validate
    PrepareResponse: Prepared document plus its report

Example Request:
    {
        "ssml": "<speak>Hello <break time=\\"300ms\\"/> world</speak>"
    }

The document size bound is enforced in routes.py from
validation.max_document_chars, not here.
"""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ValidateRequest(BaseModel):
    """
    Validation request.

    Attributes:
        ssml: The document to check. An empty string is accepted and
            reported as invalid (missing root element).
    """
    ssml: str = Field(
        ...,
        description="SSML document to validate"
    )


class PrepareRequest(BaseModel):
    """Plain text (or SSML) to turn into a validated document."""
    text: str = Field(
        ...,
        min_length=1,
        description="Plain text to wrap, or SSML to pass through"
    )


class CostModel(BaseModel):
    standard: float = Field(..., description="Estimated USD cost with standard voices")
    neural: float = Field(..., description="Estimated USD cost with neural voices")


class InfoModel(BaseModel):
    characterCount: int = Field(..., description="Billable characters (markup removed)")
    tagCount: int = Field(..., description="Number of markup tokens")
    estimatedCost: CostModel


class ValidationReportModel(BaseModel):
    """
    Validation report.

    Example Response:
        {
            "valid": true,
            "errors": [],
            "warnings": [],
            "info": {
                "characterCount": 12,
                "tagCount": 4,
                "estimatedCost": {"standard": 4.8e-05, "neural": 0.000192}
            },
            "request_id": "abc123def456"
        }
    """
    valid: bool = Field(..., description="True when no errors were found")
    errors: List[str] = Field(default_factory=list, description="Blocking problems")
    warnings: List[str] = Field(default_factory=list, description="Advisory findings")
    info: InfoModel
    request_id: str | None = Field(
        default=None,
        description="Unique request identifier for tracing"
    )


class PrepareResponse(BaseModel):
    ssml: str = Field(..., description="Prepared SSML document")
    report: ValidationReportModel
