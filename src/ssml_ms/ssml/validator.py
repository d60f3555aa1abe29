"""
SSML Validation Engine.

Checks an SSML document against a synthesis engine's schema before it is
sent for synthesis, and reports problems as data instead of raising.

Passes (always all four, in this order):
    1. Root structure: one <speak> root wrapping the whole document
    2. Well-formedness: tag balance via a stack over the token stream
    3. Schema conformance: supported tags, required attributes, legal values
    4. Metrics and heuristics: character/tag counts, cost, style warnings

Severities:
    errors   - block synthesis (structural or schema violations)
    warnings - advisory only (unknown tags, long segments, deep nesting)

Report Format (to_dict):
    {
        "valid": false,
        "errors": ["SSML must end with </speak> tag", ...],
        "warnings": [...],
        "info": {
            "characterCount": 12,
            "tagCount": 4,
            "estimatedCost": {"standard": 4.8e-05, "neural": 0.000192}
        }
    }

Usage:
    from ssml_ms.ssml import validate

    report = validate('<speak>Hello <break time="1s"/> world</speak>')
    if not report.valid:
        for message in report.errors:
            print(message)

    # Custom schema or limits
    validator = SSMLValidator(schema=load_schema_file("azure.yaml"))
    report = validator.validate(document)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from ssml_ms.core.logging import get_logger, verbose
from ssml_ms.ssml import tokenizer
from ssml_ms.ssml.schema import POLLY_SCHEMA, Schema

_LOG = get_logger("ssml-ms.validator")

CHARS_PER_PRICE_UNIT = 1_000_000


@dataclass(frozen=True)
class ValidationLimits:
    """
    Heuristic thresholds and pricing used by the metrics pass.

    Attributes:
        long_segment_max_chars: Text longer than this between breaks warns.
        max_nesting_depth: Nesting deeper than this warns (exclusive).
        standard_per_million: USD per 1M characters, standard voices.
        neural_per_million: USD per 1M characters, neural voices.
    """
    long_segment_max_chars: int = 500
    max_nesting_depth: int = 5
    standard_per_million: float = 4.00
    neural_per_million: float = 16.00


DEFAULT_LIMITS = ValidationLimits()


@dataclass(frozen=True)
class CostEstimate:
    """Projected synthesis cost in USD, unrounded."""
    standard: float = 0.0
    neural: float = 0.0


@dataclass(frozen=True)
class ReportInfo:
    """Derived document metrics."""
    character_count: int = 0
    tag_count: int = 0
    estimated_cost: CostEstimate = field(default_factory=CostEstimate)


@dataclass(frozen=True)
class ValidationReport:
    """
    Result of one validate() call.

    Attributes:
        valid: True iff errors is empty.
        errors: Blocking problems in discovery order.
        warnings: Advisory problems in discovery order.
        info: Character count, tag count and cost estimate.
    """
    valid: bool
    errors: Tuple[str, ...] = ()
    warnings: Tuple[str, ...] = ()
    info: ReportInfo = field(default_factory=ReportInfo)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "warnings": list(self.warnings),
            "info": {
                "characterCount": self.info.character_count,
                "tagCount": self.info.tag_count,
                "estimatedCost": {
                    "standard": self.info.estimated_cost.standard,
                    "neural": self.info.estimated_cost.neural,
                },
            },
        }


class _Findings:
    """Append-only error/warning accumulator for a single call."""

    def __init__(self) -> None:
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warn(self, message: str) -> None:
        self.warnings.append(message)


class SSMLValidator:
    """
    Validates SSML documents against one immutable schema.

    The validator holds no per-call state, so a single instance can serve
    concurrent callers.

    Example:
        >>> validator = SSMLValidator()
        >>> validator.validate("<speak>Hi</speak>").valid
        True
    """

    def __init__(self, schema: Schema = POLLY_SCHEMA, limits: ValidationLimits = DEFAULT_LIMITS):
        self._schema = schema
        self._limits = limits
        root = re.escape(schema.root_tag)
        self._root_open_re = re.compile(rf"<{root}[^>]*>")
        self._root_close = f"</{schema.root_tag}>"
        self._break_re = re.compile(r"<break[^>]*>")

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def limits(self) -> ValidationLimits:
        return self._limits

    def validate(self, document: Optional[str]) -> ValidationReport:
        """
        Run all four passes and build the report.

        Never raises for malformed documents; None is treated as "".
        """
        ssml = document if isinstance(document, str) else ""
        found = _Findings()

        self._check_root(ssml, found)
        self._check_balance(ssml, found)
        self._check_schema(ssml, found)
        info = self._compute_info(ssml)
        self._check_style(ssml, found)

        report = ValidationReport(
            valid=len(found.errors) == 0,
            errors=tuple(found.errors),
            warnings=tuple(found.warnings),
            info=info,
        )
        verbose(
            _LOG, "ssml_validated",
            valid=report.valid,
            errors=len(report.errors),
            warnings=len(report.warnings),
            chars=info.character_count,
            tags=info.tag_count,
        )
        return report

    # -------------------------------------------------------------------------
    # Pass 1: root structure
    # -------------------------------------------------------------------------

    def _check_root(self, ssml: str, found: _Findings) -> None:
        root = self._schema.root_tag
        trimmed = ssml.strip()
        if not trimmed.startswith(f"<{root}"):
            found.error(f"SSML must start with <{root}> tag")
        if not trimmed.endswith(self._root_close):
            found.error(f"SSML must end with </{root}> tag")

        open_count = len(self._root_open_re.findall(ssml))
        close_count = ssml.count(self._root_close)
        if open_count != close_count:
            found.error(f"Unbalanced <{root}> tags")
        if open_count > 1:
            found.error(f"Multiple <{root}> tags found - only one is allowed")

    # -------------------------------------------------------------------------
    # Pass 2: well-formedness
    # -------------------------------------------------------------------------

    def _check_balance(self, ssml: str, found: _Findings) -> None:
        stack: List[str] = []
        for token in tokenizer.iter_tags(ssml):
            if token.is_self_closing:
                continue
            if token.is_closing:
                if not stack:
                    found.error(f"Unexpected closing tag: {token.raw}")
                    continue
                # No resynchronization: the popped frame is dropped even on mismatch
                expected = stack.pop()
                if expected != token.name:
                    found.error(f"Mismatched tags: expected </{expected}>, found {token.raw}")
            else:
                stack.append(token.name)

        if stack:
            found.error("Unclosed tags: " + ", ".join(f"<{name}>" for name in stack))

    # -------------------------------------------------------------------------
    # Pass 3: schema conformance
    # -------------------------------------------------------------------------

    def _check_schema(self, ssml: str, found: _Findings) -> None:
        schema = self._schema
        for token, attr_text in tokenizer.iter_opening_tags(ssml):
            tag = token.name
            if not schema.is_supported(tag):
                found.warn(f"Unsupported tag: <{tag}>")
                continue

            attrs = tokenizer.parse_attributes(attr_text)

            required = schema.required_for(tag)
            if required and not token.is_self_closing:
                present = {name for name, _ in attrs}
                for attr in required:
                    if attr not in present:
                        found.error(f"Missing required attribute '{attr}' for tag <{tag}>")

            for attr, value in attrs:
                constraint = schema.constraint_for(tag, attr)
                if constraint is not None and not constraint.allows(value):
                    found.error(f"Invalid value '{value}' for attribute '{attr}' in tag <{tag}>")

    # -------------------------------------------------------------------------
    # Pass 4: metrics and heuristics
    # -------------------------------------------------------------------------

    def _compute_info(self, ssml: str) -> ReportInfo:
        chars = len(tokenizer.strip_markup(ssml))
        units = chars / CHARS_PER_PRICE_UNIT
        return ReportInfo(
            character_count=chars,
            tag_count=tokenizer.count_markup(ssml),
            estimated_cost=CostEstimate(
                standard=units * self._limits.standard_per_million,
                neural=units * self._limits.neural_per_million,
            ),
        )

    def _check_style(self, ssml: str, found: _Findings) -> None:
        limit = self._limits.long_segment_max_chars
        for segment in self._break_re.split(ssml):
            if len(tokenizer.strip_markup(segment)) > limit:
                found.warn("Long text segment without breaks - consider adding pauses for better speech flow")
                break

        if tokenizer.max_nesting_depth(ssml) > self._limits.max_nesting_depth:
            found.warn("Deep tag nesting detected - consider simplifying structure")

        if "><" in ssml:
            found.warn("Empty tags detected - consider removing or adding content")


_DEFAULT_VALIDATOR = SSMLValidator()


def validate(
    document: Optional[str],
    schema: Optional[Schema] = None,
    limits: Optional[ValidationLimits] = None,
) -> ValidationReport:
    """
    Validate an SSML document.

    Args:
        document: SSML markup. Non-string input validates as "".
        schema: Target engine schema (default: AWS Polly).
        limits: Heuristic thresholds and pricing (default: DEFAULT_LIMITS).

    Returns:
        A fresh ValidationReport.
    """
    if schema is None and limits is None:
        return _DEFAULT_VALIDATOR.validate(document)
    return SSMLValidator(schema or POLLY_SCHEMA, limits or DEFAULT_LIMITS).validate(document)
