"""
Request Context and Logging State.

The request id lives in a ContextVar so concurrent requests handled by
the API keep separate ids. Level and configuration are process-wide.

Environment Variables:
    - SSML_MS_LOG_LEVEL: Log level (1-4 or name)
    - SSML_MS_LOG_DIR: Directory for the JSONL log file
    - SSML_MS_JSONL_FILE: JSONL filename (default ssml-ms.jsonl)
    - SSML_MS_LOG_ROTATE_BYTES: Max file size before rotation
    - SSML_MS_LOG_ROTATE_BACKUP: Rotated files to keep
    - SSML_MS_SETTINGS: settings.yaml path to read the logging section from
"""
from __future__ import annotations

import os
from contextvars import ContextVar
from typing import Any, Dict

import yaml

from .levels import LEVEL_NAMES, LogLevel

_request_id: ContextVar[str] = ContextVar("request_id", default="-")

_configured: bool = False
_log_config: Dict[str, Any] = {}
_current_level: LogLevel = LogLevel.NORMAL


def get_request_id() -> str:
    """Request id of the current context, "-" outside a request."""
    return _request_id.get()


def set_request_id(rid: str) -> None:
    """Bind a request id to the current context for log correlation."""
    _request_id.set(rid)


def get_level() -> LogLevel:
    return _current_level


def set_level(level: LogLevel) -> None:
    global _current_level
    _current_level = level


def get_level_name() -> str:
    """Current level as "MINIMAL", "NORMAL", "VERBOSE" or "DEBUG"."""
    return LEVEL_NAMES.get(_current_level, "NORMAL")


def is_configured() -> bool:
    return _configured


def set_configured(value: bool) -> None:
    global _configured
    _configured = value


def get_log_config() -> Dict[str, Any]:
    return _log_config


def set_log_config(config: Dict[str, Any]) -> None:
    global _log_config
    _log_config = config


# (settings key, environment variable, type)
_ENV_OVERRIDES = (
    ("level", "SSML_MS_LOG_LEVEL", str),
    ("log_dir", "SSML_MS_LOG_DIR", str),
    ("jsonl_file", "SSML_MS_JSONL_FILE", str),
    ("rotate_max_bytes", "SSML_MS_LOG_ROTATE_BYTES", int),
    ("rotate_backup_count", "SSML_MS_LOG_ROTATE_BACKUP", int),
)


def read_logging_config() -> Dict[str, Any]:
    """
    Resolve logging configuration.

    Priority: environment variables, then the settings file's logging
    section, then built-in defaults. A missing or unreadable settings file
    is not an error here; logging must come up before configuration does.
    """
    cfg: Dict[str, Any] = {}

    from ssml_ms.core.config import ConfigValidationError, load_settings

    settings_path = os.getenv("SSML_MS_SETTINGS", "config/settings.yaml")
    try:
        settings = load_settings(settings_path)
        cfg.update(settings.raw.get("logging", {}) or {})
    except (OSError, yaml.YAMLError, ConfigValidationError, AttributeError):
        pass

    for key, env, cast in _ENV_OVERRIDES:
        raw = os.getenv(env)
        if not raw:
            continue
        try:
            cfg[key] = cast(raw)
        except ValueError:
            continue  # keep file/default value

    return cfg
