"""
Text Helpers for SSML Preparation.

Plain text handed to the service is turned into a minimal SSML document by
escaping the five XML special characters and wrapping the result in the
root element. Text that already looks like SSML is left untouched.

Example:
    >>> wrap_plain_text("Fish & Chips <today>")
    '<speak>Fish &amp; Chips &lt;today&gt;</speak>'
"""
from __future__ import annotations

import re

# Ampersand first so the entities produced below are not re-escaped
_XML_ESCAPES = (
    ("&", "&amp;"),
    ("<", "&lt;"),
    (">", "&gt;"),
    ('"', "&quot;"),
    ("'", "&apos;"),
)

_WS_RE = re.compile(r"\s+")


def escape_xml(text: str) -> str:
    """Escape &, <, >, " and ' for use as SSML character data."""
    for char, entity in _XML_ESCAPES:
        text = text.replace(char, entity)
    return text


def looks_like_ssml(text: str, root_tag: str = "speak") -> bool:
    """True if text (ignoring surrounding whitespace) opens with the root tag."""
    return bool(re.match(rf"<{re.escape(root_tag)}(?=[\s>/])", text.strip()))


def wrap_plain_text(text: str, root_tag: str = "speak") -> str:
    """
    Return SSML for text.

    SSML input is returned stripped but otherwise unchanged; anything else is
    stripped, escaped and wrapped in <root_tag>...</root_tag>.
    """
    stripped = text.strip()
    if looks_like_ssml(stripped, root_tag):
        return stripped
    return f"<{root_tag}>{escape_xml(stripped)}</{root_tag}>"


def preview(text: str, limit: int = 80) -> str:
    """Single-line preview for logs, truncated with an ellipsis."""
    flat = _WS_RE.sub(" ", text).strip()
    if limit <= 0:
        return ""
    if len(flat) <= limit:
        return flat
    return flat[: max(limit - 3, 0)] + "..."
