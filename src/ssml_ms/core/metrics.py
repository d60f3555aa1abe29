"""
Prometheus Metrics for SSML Validation.

Metrics Exposed:
    ssml_validations_total{result}        - Documents validated, result="valid"|"invalid"
    ssml_validation_errors_total          - Error messages reported
    ssml_validation_warnings_total        - Warning messages reported
    ssml_validation_duration_seconds      - Validation latency histogram
    ssml_characters_total                 - Billable characters seen
    ssml_rejections_total{reason}         - Synthesis gate rejections

Usage:
    from ssml_ms.core.metrics import metrics

    metrics.record_validation(valid=False, errors=2, warnings=1,
                              characters=120, duration=0.0004)
    content, content_type = metrics.get_metrics_response()

Prometheus Scrape Config Example:
    scrape_configs:
      - job_name: 'ssml-ms'
        static_configs:
          - targets: ['localhost:8000']
        metrics_path: '/metrics'
"""
from __future__ import annotations

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
)


class SSMLMetrics:
    """
    Validation metrics on a private CollectorRegistry.

    A private registry keeps these metrics from clashing with anything else
    registered in the process default registry (and lets tests build fresh
    instances). Prometheus metric objects are thread-safe.
    """

    def __init__(self):
        self._registry = CollectorRegistry()

        self._validations_total = Counter(
            "ssml_validations_total",
            "Total SSML documents validated",
            ["result"],
            registry=self._registry,
        )
        self._errors_total = Counter(
            "ssml_validation_errors_total",
            "Total validation error messages reported",
            registry=self._registry,
        )
        self._warnings_total = Counter(
            "ssml_validation_warnings_total",
            "Total validation warning messages reported",
            registry=self._registry,
        )
        self._duration = Histogram(
            "ssml_validation_duration_seconds",
            "SSML validation duration in seconds",
            buckets=(0.0001, 0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5),
            registry=self._registry,
        )
        self._characters_total = Counter(
            "ssml_characters_total",
            "Total billable characters in validated documents",
            registry=self._registry,
        )
        self._rejections_total = Counter(
            "ssml_rejections_total",
            "Documents blocked from synthesis",
            ["reason"],
            registry=self._registry,
        )

    @property
    def registry(self) -> CollectorRegistry:
        return self._registry

    def record_validation(
        self,
        valid: bool,
        errors: int,
        warnings: int,
        characters: int,
        duration: float,
    ) -> None:
        """Record one completed validation."""
        self._validations_total.labels(result="valid" if valid else "invalid").inc()
        if errors:
            self._errors_total.inc(errors)
        if warnings:
            self._warnings_total.inc(warnings)
        if characters:
            self._characters_total.inc(characters)
        self._duration.observe(duration)

    def record_rejection(self, reason: str = "invalid_ssml") -> None:
        """Record a document blocked by the synthesis gate."""
        self._rejections_total.labels(reason=reason).inc()

    def get_sample(self, name: str, labels: dict | None = None) -> float | None:
        """Current value of one sample, e.g. get_sample("ssml_validations_total", {"result": "valid"})."""
        return self._registry.get_sample_value(name, labels or {})

    def get_metrics_response(self) -> tuple[bytes, str]:
        """Metrics in Prometheus text format as (content, content_type)."""
        return generate_latest(self._registry), CONTENT_TYPE_LATEST


# Import this to record metrics: from ssml_ms.core.metrics import metrics
metrics = SSMLMetrics()
