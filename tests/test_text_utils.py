"""Tests for text and timing helpers."""
import time

from ssml_ms.utils.text import escape_xml, looks_like_ssml, preview, wrap_plain_text
from ssml_ms.utils.timeit import timeit


class TestEscapeXml:
    """escape_xml()."""

    def test_all_special_characters(self):
        """The five XML specials become entities."""
        assert escape_xml("""<a & 'b' "c">""") == "&lt;a &amp; &apos;b&apos; &quot;c&quot;&gt;"

    def test_no_double_escaping(self):
        """Ampersands are escaped once."""
        assert escape_xml("&lt;") == "&amp;lt;"

    def test_plain_text_unchanged(self):
        """Text without specials is returned as is."""
        assert escape_xml("Merhaba dünya") == "Merhaba dünya"


class TestWrapPlainText:
    """looks_like_ssml() and wrap_plain_text()."""

    def test_detects_root(self):
        """Root tag with or without attributes counts as SSML."""
        assert looks_like_ssml("<speak>x</speak>")
        assert looks_like_ssml('  <speak xml:lang="en-US">x</speak>')
        assert not looks_like_ssml("<speaker>x</speaker>")
        assert not looks_like_ssml("say <speak>")

    def test_wraps_text(self):
        """Plain text is trimmed, escaped and wrapped."""
        assert wrap_plain_text("  Tom & Jerry \n") == "<speak>Tom &amp; Jerry</speak>"

    def test_other_root_tag(self):
        """The root tag is configurable."""
        assert wrap_plain_text("hi", root_tag="doc") == "<doc>hi</doc>"
        assert wrap_plain_text("<doc>hi</doc>", root_tag="doc") == "<doc>hi</doc>"

    def test_empty_text(self):
        """Empty text becomes an empty root element."""
        assert wrap_plain_text("") == "<speak></speak>"


class TestPreview:
    """preview()."""

    def test_short_text(self):
        """Short text is flattened but not truncated."""
        assert preview("a\n  b") == "a b"

    def test_truncated(self):
        """Long text ends in an ellipsis within the limit."""
        out = preview("x" * 100, limit=10)
        assert out == "xxxxxxx..."
        assert len(out) == 10

    def test_zero_limit(self):
        """A zero limit yields an empty string."""
        assert preview("abc", limit=0) == ""


class TestTimeit:
    """timeit context manager."""

    def test_measures_block(self):
        """Elapsed time is recorded after the block."""
        with timeit("sleep") as t:
            assert t.seconds == 0.0
            time.sleep(0.01)

        assert t.timing.name == "sleep"
        assert t.seconds >= 0.005
