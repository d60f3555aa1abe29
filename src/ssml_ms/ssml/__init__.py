"""
SSML Validation Layer.

Components:
    - schema.py: Engine schema tables (AWS Polly built in, YAML loadable)
    - tokenizer.py: Lenient regex tag tokenizer
    - validator.py: Four-pass validation engine and ValidationReport
"""
from .schema import (
    POLLY_SCHEMA,
    AttributeConstraint,
    Schema,
    SchemaDefinitionError,
    get_schema,
    load_schema_file,
)
from .validator import (
    DEFAULT_LIMITS,
    CostEstimate,
    ReportInfo,
    SSMLValidator,
    ValidationLimits,
    ValidationReport,
    validate,
)

__all__ = [
    "POLLY_SCHEMA",
    "AttributeConstraint",
    "Schema",
    "SchemaDefinitionError",
    "get_schema",
    "load_schema_file",
    "DEFAULT_LIMITS",
    "CostEstimate",
    "ReportInfo",
    "SSMLValidator",
    "ValidationLimits",
    "ValidationReport",
    "validate",
]
