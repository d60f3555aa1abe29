"""
Log Level Definitions and Mapping.

ssml-ms uses four numeric levels instead of Python's five names:
    1 = MINIMAL  - startup, shutdown, failures
    2 = NORMAL   - one line per request, accept/reject decisions (default)
    3 = VERBOSE  - per-document validation summaries
    4 = DEBUG    - internal state

Mapping to Python Levels:
    MINIMAL (1) -> logging.WARNING (30)
    NORMAL (2)  -> logging.INFO (20)
    VERBOSE (3) -> logging.DEBUG (10)
    DEBUG (4)   -> logging.DEBUG - 5 (5, TRACE)
"""
from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any


class LogLevel(IntEnum):
    """Numeric log levels, higher is chattier."""
    MINIMAL = 1
    NORMAL = 2
    VERBOSE = 3
    DEBUG = 4


LEVEL_MAP = {
    LogLevel.MINIMAL: logging.WARNING,
    LogLevel.NORMAL: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG - 5,
}

LEVEL_NAMES = {int(level): level.name for level in LogLevel}

# LogLevel names and digits, plus Python's level names
_NAME_MAP = {level.name: level for level in LogLevel}
_NAME_MAP.update({str(int(level)): level for level in LogLevel})
_NAME_MAP.update(
    TRACE=LogLevel.DEBUG,
    CRITICAL=LogLevel.MINIMAL,
    ERROR=LogLevel.MINIMAL,
    WARNING=LogLevel.MINIMAL,
    WARN=LogLevel.MINIMAL,
    INFO=LogLevel.NORMAL,
)


def coerce_level(value: Any) -> LogLevel:
    """
    Convert an int, name or LogLevel to LogLevel.

    Integers 1-4 are taken as-is; larger integers are read as Python
    logging levels (WARNING -> MINIMAL, INFO -> NORMAL, lower -> DEBUG).
    Anything unrecognized becomes NORMAL.

    Examples:
        >>> coerce_level("verbose")
        <LogLevel.VERBOSE: 3>
        >>> coerce_level(logging.WARNING)
        <LogLevel.MINIMAL: 1>
    """
    if isinstance(value, LogLevel):
        return value

    if isinstance(value, int) and not isinstance(value, bool):
        if 1 <= value <= 4:
            return LogLevel(value)
        if value >= logging.WARNING:
            return LogLevel.MINIMAL
        if value >= logging.INFO:
            return LogLevel.NORMAL
        return LogLevel.DEBUG

    if isinstance(value, str):
        return _NAME_MAP.get(value.upper().strip(), LogLevel.NORMAL)

    return LogLevel.NORMAL
