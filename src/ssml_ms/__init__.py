"""
ssml-ms: SSML Validation Microservice.

Checks SSML documents against an engine schema (AWS Polly built in) before
they are sent for synthesis, and reports errors, warnings, character counts
and an estimated synthesis cost.

Key Features:
    - Four-pass validation: root structure, tag balance, schema, heuristics
    - Built-in AWS Polly schema, custom schemas loadable from YAML
    - Synthesis gate that rejects documents with errors
    - Plain-text wrapping for callers that send unmarked text
    - REST API (/v1/ssml/*) with Prometheus metrics

Example Usage:
    >>> from ssml_ms.ssml import validate
    >>>
    >>> report = validate('<speak>Hello <emphasis level="strong">world</emphasis>!</speak>')
    >>> report.valid, report.info.character_count
    (True, 12)
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
