"""
ssml-ms Structured Logging.

Numeric levels (1 MINIMAL .. 4 DEBUG), colored console output, optional
JSONL file output with rotation, and request-id correlation.

Configuration:
    export SSML_MS_LOG_LEVEL=3   # VERBOSE: one line per validated document
    export SSML_MS_LOG_DIR=logs  # enables logs/ssml-ms.jsonl
    export SSML_MS_NO_COLOR=1

    settings.yaml:
        logging:
          level: 2
          log_dir: logs
          jsonl_file: ssml-ms.jsonl

Usage:
    from ssml_ms.core.logging import get_logger, info, warn

    log = get_logger("ssml-ms.mymodule")
    info(log, "ssml_accepted", chars=120, warnings=0)
    warn(log, "ssml_rejected", errors=2)
    verbose(log, "ssml_validated", tags=14)    # level 3+
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from . import colors
from .colors import Colors, colorize, get_tag_color, supports_color
from .context import (
    get_level,
    get_level_name,
    get_log_config,
    get_request_id,
    is_configured,
    read_logging_config,
    set_configured,
    set_level,
    set_log_config,
    set_request_id,
)
from .formatters import ColoredConsoleFormatter, JsonlFormatter
from .levels import LEVEL_MAP, LEVEL_NAMES, LogLevel, coerce_level

# Below every real record so the root logger never filters; handlers decide
_ROOT_LEVEL = logging.DEBUG - 10

# helper tag -> (python level, numeric level needed to emit)
_HELPER_LEVELS: Dict[str, Tuple[int, LogLevel]] = {
    "ERROR": (logging.ERROR, LogLevel.MINIMAL),
    "FAIL": (logging.ERROR, LogLevel.MINIMAL),
    "WARN": (logging.WARNING, LogLevel.NORMAL),
    "INFO": (logging.INFO, LogLevel.NORMAL),
    "SUCCESS": (logging.INFO, LogLevel.NORMAL),
    "VERBOSE": (logging.DEBUG, LogLevel.VERBOSE),
    "DEBUG": (logging.DEBUG, LogLevel.DEBUG),
    "TRACE": (logging.DEBUG - 5, LogLevel.DEBUG),
}


def _console_handler(level: LogLevel) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LEVEL_MAP.get(level, logging.INFO))
    handler.setFormatter(ColoredConsoleFormatter())
    return handler


def _jsonl_handler(log_config: Dict[str, Any]) -> logging.Handler:
    """Rotating JSONL file under log_dir; records every level."""
    log_dir = Path(log_config["log_dir"])
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / str(log_config.get("jsonl_file", "ssml-ms.jsonl")),
        maxBytes=int(log_config.get("rotate_max_bytes", 10 * 1024 * 1024)),
        backupCount=int(log_config.get("rotate_backup_count", 5)),
        encoding="utf-8",
        delay=True,
    )
    handler.setLevel(_ROOT_LEVEL)
    handler.setFormatter(JsonlFormatter())
    return handler


def configure_logging(level: Optional[int | str | LogLevel] = None, force: bool = False) -> None:
    """
    Install console (and optionally JSONL file) handlers on the root logger.

    Args:
        level: Log level (1-4, name, or LogLevel). Defaults to config/env.
        force: Reconfigure even if already configured.
    """
    if is_configured() and not force:
        return

    colors.USE_COLORS = supports_color()

    log_config = read_logging_config()
    set_log_config(log_config)

    if level is None:
        level = log_config.get("level", LogLevel.NORMAL)
    current = coerce_level(level)
    set_level(current)

    root = logging.getLogger()
    root.setLevel(_ROOT_LEVEL)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    root.addHandler(_console_handler(current))
    if log_config.get("log_dir"):
        root.addHandler(_jsonl_handler(log_config))

    set_configured(True)


def _emit(logger: logging.Logger, tag: str, msg: str, fields: Dict[str, Any]) -> None:
    py_level, needed = _HELPER_LEVELS[tag]
    if needed > get_level():
        return

    logger.log(
        py_level,
        msg,
        extra={
            # VERBOSE lines are shown with the INFO tag
            "tag": "INFO" if tag == "VERBOSE" else tag,
            "request_id": get_request_id(),
            "event": fields.pop("event", None),
            "seconds": fields.pop("seconds", None),
            "extra_data": fields or None,
            "numeric_level": int(needed),
        },
    )


def get_logger(name: str = "ssml-ms") -> logging.Logger:
    """Get a logger, configuring logging on first use."""
    configure_logging()
    return logging.getLogger(name)


def info(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _emit(logger, "INFO", msg, fields)


def warn(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _emit(logger, "WARN", msg, fields)


def error(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Shown at every level."""
    _emit(logger, "ERROR", msg, fields)


def success(logger: logging.Logger, msg: str, **fields: Any) -> None:
    _emit(logger, "SUCCESS", msg, fields)


def fail(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Shown at every level."""
    _emit(logger, "FAIL", msg, fields)


def verbose(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Level 3 and up."""
    _emit(logger, "VERBOSE", msg, fields)


def debug(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Level 4 only."""
    _emit(logger, "DEBUG", msg, fields)


def trace(logger: logging.Logger, msg: str, **fields: Any) -> None:
    """Level 4, below Python's DEBUG."""
    _emit(logger, "TRACE", msg, fields)


__all__ = [
    # levels
    "LogLevel", "LEVEL_MAP", "LEVEL_NAMES", "coerce_level",
    # colors
    "Colors", "colorize", "get_tag_color", "supports_color",
    # context
    "get_request_id", "set_request_id", "get_level", "get_level_name", "get_log_config",
    # formatters
    "JsonlFormatter", "ColoredConsoleFormatter",
    # setup and helpers
    "configure_logging", "get_logger",
    "info", "warn", "error", "success", "fail", "verbose", "debug", "trace",
]
