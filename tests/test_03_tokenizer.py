"""Tests for the regex tag tokenizer."""
from ssml_ms.ssml import tokenizer
from ssml_ms.ssml.tokenizer import CLOSING, OPENING, SELF_CLOSING


class TestIterTags:
    """Tag tokens in document order."""

    def test_kinds(self):
        """Opening, closing and self-closing tokens are classified."""
        tokens = list(tokenizer.iter_tags('<speak>Hi<break time="1s"/></speak>'))

        assert [t.name for t in tokens] == ["speak", "break", "speak"]
        assert [t.kind for t in tokens] == [OPENING, SELF_CLOSING, CLOSING]
        assert tokens[1].raw == '<break time="1s"/>'

    def test_namespaced_names(self):
        """Names with colons and hyphens are atomic."""
        tokens = list(tokenizer.iter_tags("<amazon:auto-breaths></amazon:auto-breaths>"))
        assert [t.name for t in tokens] == ["amazon:auto-breaths", "amazon:auto-breaths"]

    def test_text_without_tags(self):
        """Plain text and stray brackets produce no tokens."""
        assert list(tokenizer.iter_tags("1 < 2 and 3 > 2")) == []

    def test_self_closing_with_space(self):
        """'<break />' is self-closing."""
        (token,) = tokenizer.iter_tags("<break />")
        assert token.is_self_closing
        assert not token.is_opening


class TestOpeningTags:
    """iter_opening_tags() and attribute parsing."""

    def test_closing_tags_skipped(self):
        """Only opening and self-closing tags are yielded."""
        found = [(t.name, attrs) for t, attrs in tokenizer.iter_opening_tags(
            '<speak><prosody rate="slow">x</prosody><break/></speak>'
        )]
        assert found == [("speak", ""), ("prosody", ' rate="slow"'), ("break", "/")]

    def test_parse_attributes_in_order(self):
        """Double-quoted pairs are returned in order."""
        attrs = tokenizer.parse_attributes(' alphabet="ipa" ph="pɪˈkɑːn"')
        assert attrs == [("alphabet", "ipa"), ("ph", "pɪˈkɑːn")]

    def test_single_quotes_not_recognized(self):
        """Single-quoted values are invisible to the parser."""
        assert tokenizer.parse_attributes(" level='strong'") == []

    def test_attribute_values_keep_non_ascii(self):
        """Values may hold any character except a double quote."""
        assert tokenizer.parse_attributes(' time="٣s"') == [("time", "٣s")]

    def test_attribute_names_are_ascii(self):
        """Non-ASCII letters are not part of an attribute name."""
        assert tokenizer.parse_attributes(' naïve="x"') == [("ve", "x")]


class TestMarkupHelpers:
    """strip_markup(), count_markup() and max_nesting_depth()."""

    def test_strip_and_count(self):
        """Text content and token count of the reference document."""
        doc = '<speak>Hello <emphasis level="strong">world</emphasis>!</speak>'
        assert tokenizer.strip_markup(doc) == "Hello world!"
        assert tokenizer.count_markup(doc) == 4

    def test_entities_not_decoded(self):
        """Entities count as their literal characters."""
        assert tokenizer.strip_markup("<speak>a &amp; b</speak>") == "a &amp; b"

    def test_nesting_depth(self):
        """Self-closing tokens do not add depth."""
        assert tokenizer.max_nesting_depth("<speak><p><s>x<break/></s></p></speak>") == 3
        assert tokenizer.max_nesting_depth("") == 0

    def test_nesting_depth_after_stray_closing(self):
        """A stray closing tag lowers the running depth before any opening."""
        assert tokenizer.max_nesting_depth("</x><a><b>y</b></a>") == 1
        assert tokenizer.max_nesting_depth("</x/><a>y</a>") == 1

    def test_stray_closing_tags(self):
        """Stray closers lower the running depth but not the maximum."""
        assert tokenizer.max_nesting_depth("</p></p><speak><p>x</p></speak>") == 0
        assert tokenizer.max_nesting_depth("<a><b></b></a></x>") == 2
