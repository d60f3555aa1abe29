"""
Log Formatters.

    JsonlFormatter: one JSON object per line, for files and log shippers
        {"ts":"2025-03-02T10:15:00+01:00","level":2,"tag":"INFO",
         "message":"ssml_rejected","request_id":"a1b2c3","extra":{"errors":2}}

    ColoredConsoleFormatter: human-readable terminal lines
        10:15:00 [ WARN  ] (a1b2c3) ssml_rejected errors=2 warnings=1 0.001s

Console coloring of report fields:
    valid=True green, valid=False red
    errors > 0 red, warnings > 0 yellow, zero counts dim
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Any, Dict

from .colors import Colors, colorize, get_tag_color


class JsonlFormatter(logging.Formatter):
    """Format records as single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created).astimezone().isoformat(),
            "level": getattr(record, "numeric_level", 2),
            "tag": getattr(record, "tag", record.levelname),
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", "-"),
        }

        event = getattr(record, "event", None)
        if event:
            payload["event"] = event

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            payload["seconds"] = seconds

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            payload["extra"] = extra_data

        return json.dumps(payload, ensure_ascii=False, default=str)


class ColoredConsoleFormatter(logging.Formatter):
    """
    Format records as colored console lines.

    Output Format:
        HH:MM:SS [ TAG   ] (rid) message key=value 0.123s
    """

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created).strftime("%H:%M:%S")
        tag = getattr(record, "tag", record.levelname)
        rid = getattr(record, "request_id", "-")

        parts = [colorize(ts, Colors.DIM), colorize(f"[{tag:^7}]", get_tag_color(tag))]
        if rid != "-":
            parts.append(colorize(f"({rid})", Colors.DIM + Colors.CYAN))
        parts.append(record.getMessage())

        event = getattr(record, "event", None)
        if event:
            parts.append(colorize(f"event={event}", Colors.BLUE))

        extra_data = getattr(record, "extra_data", None)
        if extra_data:
            for k, v in extra_data.items():
                parts.append(colorize(f"{k}={v}", self._field_color(k, v)))

        seconds = getattr(record, "seconds", None)
        if seconds is not None:
            if seconds < 0.01:
                time_color = Colors.GREEN
            elif seconds < 0.1:
                time_color = Colors.YELLOW
            else:
                time_color = Colors.RED
            parts.append(colorize(f"{seconds:.3f}s", time_color))

        return " ".join(parts)

    @staticmethod
    def _field_color(key: str, value: Any) -> str:
        if key == "valid" and isinstance(value, bool):
            return Colors.GREEN if value else Colors.RED
        if key == "errors" and isinstance(value, int):
            return Colors.RED if value > 0 else Colors.DIM
        if key == "warnings" and isinstance(value, int):
            return Colors.YELLOW if value > 0 else Colors.DIM
        return Colors.DIM
