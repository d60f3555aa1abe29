"""
Lenient Regex Tag Tokenizer.

SSML documents sent to a synthesis engine are short and machine-built, so
tags are found with a single regular expression rather than an XML parser.
The tokenizer never fails: any text that does not look like a tag is
treated as character data.

Token Grammar:
    "<", optional "/", a tag name of letters, colons and hyphens,
    optional attribute text (anything but ">"), ">"

Token Kinds:
    opening      <prosody rate="slow">
    closing      </prosody>
    self_closing <break time="1s"/>  (no nesting obligation)

Known Blind Spots:
    A ">" inside a quoted attribute value, comments and CDATA sections
    are not understood and will desynchronize the token stream.

Example:
    >>> [t.name for t in iter_tags('<speak>Hi<break time="1s"/></speak>')]
    ['speak', 'break', 'speak']
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator, List, Tuple

# Any tag token, opening or closing
TAG_RE = re.compile(r"</?([a-zA-Z:-]+)[^>]*>")

# Opening-form tokens only; "</x>" cannot match because "/" is not a name char
OPENING_TAG_RE = re.compile(r"<([a-zA-Z:-]+)([^>]*)>")

# Anything between angle brackets, used for stripping and counting markup
MARKUP_RE = re.compile(r"<[^>]*>")

# name="value" pairs, double-quoted only; names are ASCII word characters
ATTRIBUTE_RE = re.compile(r'([\w-]+)="([^"]*)"', re.ASCII)

OPENING = "opening"
CLOSING = "closing"
SELF_CLOSING = "self_closing"


@dataclass(frozen=True)
class TagToken:
    """
    One tag found in a document.

    Attributes:
        raw: The full token text, e.g. '<break time="1s"/>'.
        name: Tag name, e.g. "break" or "amazon:breath".
        kind: OPENING, CLOSING or SELF_CLOSING.
    """
    raw: str
    name: str
    kind: str

    @property
    def is_opening(self) -> bool:
        return self.kind == OPENING

    @property
    def is_closing(self) -> bool:
        return self.kind == CLOSING

    @property
    def is_self_closing(self) -> bool:
        return self.kind == SELF_CLOSING


def classify(raw: str) -> str:
    """Classify a raw tag token."""
    if raw.startswith("</"):
        return CLOSING
    if "/>" in raw:
        return SELF_CLOSING
    return OPENING


def iter_tags(document: str) -> Iterator[TagToken]:
    """Yield every tag token in document order."""
    for m in TAG_RE.finditer(document):
        raw = m.group(0)
        yield TagToken(raw=raw, name=m.group(1), kind=classify(raw))


def iter_opening_tags(document: str) -> Iterator[Tuple[TagToken, str]]:
    """
    Yield (token, attribute_text) for opening and self-closing tags.

    The attribute text is everything between the tag name and ">", including
    a trailing "/" on self-closing tags.
    """
    for m in OPENING_TAG_RE.finditer(document):
        raw = m.group(0)
        token = TagToken(raw=raw, name=m.group(1), kind=classify(raw))
        yield token, m.group(2)


def parse_attributes(attr_text: str) -> List[Tuple[str, str]]:
    """
    Parse name="value" pairs in order of appearance.

    Single-quoted and unquoted values are not recognized.
    """
    return ATTRIBUTE_RE.findall(attr_text)


def strip_markup(text: str) -> str:
    """Remove every tag token; entities are left undecoded."""
    return MARKUP_RE.sub("", text)


def count_markup(text: str) -> int:
    """Number of tag tokens of any kind."""
    return len(MARKUP_RE.findall(text))


def max_nesting_depth(document: str) -> int:
    """
    Deepest level of open tags reached while scanning the document.

    Tokens ending in "/>" are ignored. Stray closing tags may push the
    running depth below zero; only the maximum is reported.
    """
    depth = 0
    deepest = 0
    for token in iter_tags(document):
        if token.raw.endswith("/>"):
            continue
        if token.is_opening:
            depth += 1
            deepest = max(deepest, depth)
        else:
            depth -= 1
    return deepest
