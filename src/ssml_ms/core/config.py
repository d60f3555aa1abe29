"""
Configuration Management for ssml-ms.

Configuration Hierarchy (highest priority first):
    1. Environment variables (SSML_MS_SCHEMA_PROFILE, SSML_MS_LOG_LEVEL, ...)
    2. YAML config file (config/settings.yaml)
    3. Defaults class values

Example settings.yaml:
    schema:
      profile: polly          # built-in table
      # path: config/schemas/custom.yaml

    validation:
      long_segment_max_chars: 500
      max_nesting_depth: 5
      max_document_chars: 100000

    pricing:
      standard_per_million: 4.00
      neural_per_million: 16.00

    logging:
      level: 2  # NORMAL
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class ConfigValidationError(Exception):
    """Raised when a configuration value is out of bounds or of the wrong type."""
    pass


class Defaults:
    """
    Centralized default configuration values.

    Validation warns for more than 500 characters between breaks and for
    nesting deeper than 5; prices are AWS Polly list prices.
    """

    # ─────────────────────────────────────────────────────────────────────────
    # Schema
    # ─────────────────────────────────────────────────────────────────────────
    SCHEMA_PROFILE = "polly"            # Built-in schema table
    SCHEMA_PATH: Optional[str] = None   # YAML schema file (overrides profile)

    # ─────────────────────────────────────────────────────────────────────────
    # Validation heuristics
    # ─────────────────────────────────────────────────────────────────────────
    VALIDATION_LONG_SEGMENT_MAX_CHARS = 500
    VALIDATION_MAX_NESTING_DEPTH = 5
    VALIDATION_MAX_DOCUMENT_CHARS = 100_000   # HTTP request bound

    # ─────────────────────────────────────────────────────────────────────────
    # Pricing (USD per 1M characters)
    # ─────────────────────────────────────────────────────────────────────────
    PRICING_STANDARD_PER_MILLION = 4.00
    PRICING_NEURAL_PER_MILLION = 16.00

    # ─────────────────────────────────────────────────────────────────────────
    # Logging
    # ─────────────────────────────────────────────────────────────────────────
    LOGGING_TEXT_PREVIEW_CHARS = 80
    LOGGING_LEVEL = 2                   # 1=MINIMAL, 2=NORMAL, 3=VERBOSE, 4=DEBUG


@dataclass
class SchemaConfig:
    """Which schema table the service validates against."""
    profile: str = Defaults.SCHEMA_PROFILE
    path: Optional[str] = Defaults.SCHEMA_PATH


@dataclass
class ValidationConfig:
    """Heuristic thresholds for the metrics pass."""
    long_segment_max_chars: int = Defaults.VALIDATION_LONG_SEGMENT_MAX_CHARS
    max_nesting_depth: int = Defaults.VALIDATION_MAX_NESTING_DEPTH
    max_document_chars: int = Defaults.VALIDATION_MAX_DOCUMENT_CHARS


@dataclass
class PricingConfig:
    """Per-million-character rates used for cost estimates."""
    standard_per_million: float = Defaults.PRICING_STANDARD_PER_MILLION
    neural_per_million: float = Defaults.PRICING_NEURAL_PER_MILLION


@dataclass
class LoggingConfig:
    """
    Logging configuration.

    Log levels:
        1 = MINIMAL, 2 = NORMAL (default), 3 = VERBOSE, 4 = DEBUG
    """
    text_preview_chars: int = Defaults.LOGGING_TEXT_PREVIEW_CHARS
    level: int = Defaults.LOGGING_LEVEL


@dataclass
class SSMLServiceConfig:
    """
    Validated configuration for SSMLService.

    Usage:
        settings = load_settings("config/settings.yaml")
        config = SSMLServiceConfig.from_settings(settings)
        print(config.validation.max_nesting_depth)
    """
    schema: SchemaConfig = field(default_factory=SchemaConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)
    pricing: PricingConfig = field(default_factory=PricingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_settings(cls, settings: "Settings") -> "SSMLServiceConfig":
        """
        Create SSMLServiceConfig from Settings with validation.

        Raises:
            ConfigValidationError: If any value fails validation.
        """
        raw = settings.raw

        # ─────────────────────────────────────────────────────────────────────
        # Schema selection (environment wins)
        # ─────────────────────────────────────────────────────────────────────
        schema_raw = cls._section(raw, "schema")
        path = os.getenv("SSML_MS_SCHEMA_PATH") or schema_raw.get("path", Defaults.SCHEMA_PATH)
        schema = SchemaConfig(
            profile=str(os.getenv("SSML_MS_SCHEMA_PROFILE") or schema_raw.get("profile", Defaults.SCHEMA_PROFILE)),
            path=str(path) if path else None,
        )
        if not schema.profile.strip():
            raise ConfigValidationError("schema.profile must not be empty")

        # ─────────────────────────────────────────────────────────────────────
        # Validation heuristics
        # ─────────────────────────────────────────────────────────────────────
        validation_raw = cls._section(raw, "validation")
        validation = ValidationConfig(
            long_segment_max_chars=cls._as_int(
                "validation.long_segment_max_chars",
                validation_raw.get("long_segment_max_chars", Defaults.VALIDATION_LONG_SEGMENT_MAX_CHARS),
            ),
            max_nesting_depth=cls._as_int(
                "validation.max_nesting_depth",
                validation_raw.get("max_nesting_depth", Defaults.VALIDATION_MAX_NESTING_DEPTH),
            ),
            max_document_chars=cls._as_int(
                "validation.max_document_chars",
                validation_raw.get("max_document_chars", Defaults.VALIDATION_MAX_DOCUMENT_CHARS),
            ),
        )
        cls._validate_positive("validation.long_segment_max_chars", validation.long_segment_max_chars)
        cls._validate_positive("validation.max_nesting_depth", validation.max_nesting_depth)
        cls._validate_positive("validation.max_document_chars", validation.max_document_chars)

        # ─────────────────────────────────────────────────────────────────────
        # Pricing
        # ─────────────────────────────────────────────────────────────────────
        pricing_raw = cls._section(raw, "pricing")
        pricing = PricingConfig(
            standard_per_million=cls._as_float(
                "pricing.standard_per_million",
                pricing_raw.get("standard_per_million", Defaults.PRICING_STANDARD_PER_MILLION),
            ),
            neural_per_million=cls._as_float(
                "pricing.neural_per_million",
                pricing_raw.get("neural_per_million", Defaults.PRICING_NEURAL_PER_MILLION),
            ),
        )
        cls._validate_non_negative("pricing.standard_per_million", pricing.standard_per_million)
        cls._validate_non_negative("pricing.neural_per_million", pricing.neural_per_million)

        # ─────────────────────────────────────────────────────────────────────
        # Logging
        # ─────────────────────────────────────────────────────────────────────
        logging_raw = cls._section(raw, "logging")
        log_level_raw = logging_raw.get("level", Defaults.LOGGING_LEVEL)

        # Accept names ("INFO", "VERBOSE") as well as numbers
        if isinstance(log_level_raw, str):
            level_map = {
                "MINIMAL": 1, "1": 1,
                "NORMAL": 2, "INFO": 2, "2": 2,
                "VERBOSE": 3, "3": 3,
                "DEBUG": 4, "TRACE": 4, "4": 4,
            }
            log_level = level_map.get(log_level_raw.strip().upper(), Defaults.LOGGING_LEVEL)
        else:
            log_level = cls._as_int("logging.level", log_level_raw)

        logging_cfg = LoggingConfig(
            text_preview_chars=cls._as_int(
                "logging.text_preview_chars",
                logging_raw.get("text_preview_chars", Defaults.LOGGING_TEXT_PREVIEW_CHARS),
            ),
            level=log_level,
        )
        cls._validate_non_negative("logging.text_preview_chars", logging_cfg.text_preview_chars)
        cls._validate_range("logging.level", logging_cfg.level, 1, 4)

        return cls(
            schema=schema,
            validation=validation,
            pricing=pricing,
            logging=logging_cfg,
        )

    @staticmethod
    def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
        section = raw.get(name) or {}
        if not isinstance(section, dict):
            raise ConfigValidationError(f"{name} must be a mapping, got {type(section).__name__}")
        return section

    @staticmethod
    def _as_int(name: str, value: Any) -> int:
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(f"{name} must be an integer, got {value!r}") from e

    @staticmethod
    def _as_float(name: str, value: Any) -> float:
        try:
            return float(value)
        except (TypeError, ValueError) as e:
            raise ConfigValidationError(f"{name} must be a number, got {value!r}") from e

    @staticmethod
    def _validate_positive(name: str, value: int | float) -> None:
        """Validate that a value is positive (> 0)."""
        if value <= 0:
            raise ConfigValidationError(f"{name} must be positive, got {value}")

    @staticmethod
    def _validate_non_negative(name: str, value: int | float) -> None:
        """Validate that a value is non-negative (>= 0)."""
        if value < 0:
            raise ConfigValidationError(f"{name} must be non-negative, got {value}")

    @staticmethod
    def _validate_range(name: str, value: int | float, min_val: int | float, max_val: int | float) -> None:
        """Validate that a value is within [min_val, max_val]."""
        if not (min_val <= value <= max_val):
            raise ConfigValidationError(f"{name} must be between {min_val} and {max_val}, got {value}")


@dataclass(frozen=True)
class Settings:
    """
    Immutable settings container loaded from YAML.

    Use get_service_config() for the validated, typed view.
    """
    raw: Dict[str, Any]

    def get_service_config(self) -> SSMLServiceConfig:
        """
        Get validated SSMLServiceConfig from these settings.

        Raises:
            ConfigValidationError: If validation fails.
        """
        return SSMLServiceConfig.from_settings(self)


def load_settings(path: str = "config/settings.yaml", missing_ok: bool = False) -> Settings:
    """
    Load settings from a YAML configuration file.

    Args:
        path: Path to the YAML configuration file.
        missing_ok: Return empty Settings (all defaults) when the file is absent.

    Raises:
        FileNotFoundError: If the file doesn't exist and missing_ok is False.
        ConfigValidationError: If the file does not hold a mapping.
    """
    p = Path(path)
    if not p.exists():
        if missing_ok:
            return Settings(raw={})
        raise FileNotFoundError(f"settings file not found: {p.resolve()}")

    with p.open("r", encoding="utf-8") as f:
        raw: Dict[str, Any] = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ConfigValidationError(f"settings file {p} must contain a mapping")

    return Settings(raw=raw)
