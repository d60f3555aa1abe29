"""
ssml-ms Services Layer.

Sits between the API layer and the validation engine.

Components:
    - validation_service.py: SSMLService (validation, preparation, synthesis gate)
"""
from .validation_service import (
    ErrorCode,
    InvalidSSMLError,
    SchemaLoadError,
    SSMLError,
    SSMLService,
    get_service,
    reset_service,
)

__all__ = [
    "SSMLService",
    "SSMLError",
    "InvalidSSMLError",
    "SchemaLoadError",
    "ErrorCode",
    "get_service",
    "reset_service",
]
