"""Tests for rich_text entry points and HTML utilities."""

from __future__ import annotations

import pytest

from builders import bullet_list, document, list_item, paragraph, text
from lexical2pt.html_utils import escape_attr, escape_text, normalize_whitespace, visible_text
from lexical2pt.rich_text import excerpt, render_rich_text
from lexical2pt.transformer import convert


class TestRenderRichText:
    """Tests for render_rich_text."""

    def test_string_passes_through(self) -> None:
        """Legacy HTML strings are returned unchanged."""
        assert render_rich_text("<p>legacy</p>") == "<p>legacy</p>"

    def test_lexical_document(self) -> None:
        """Lexical documents are converted then rendered."""
        assert render_rich_text(document(paragraph(text("Hi"))), plain=True) == "<p>Hi</p>"

    def test_lexical_document_styled(self) -> None:
        """Styled rendering is the default."""
        assert render_rich_text(document(paragraph(text("Hi")))) == '<p class="mb-4">Hi</p>'

    def test_portable_text_blocks(self) -> None:
        """Block lists are rendered directly."""
        blocks = convert(document(bullet_list(list_item(text("a")))))
        assert render_rich_text(blocks, plain=True) == "<ul><li>a</li></ul>"

    @pytest.mark.parametrize("value", [None, 0, {}, {"root": {}}, []])
    def test_empty(self, value) -> None:
        """Absent or malformed content renders to an empty string."""
        assert render_rich_text(value) == ""


class TestExcerpt:
    """Tests for excerpt."""

    def test_short_text_unchanged(self) -> None:
        """Text within the limit is returned with whitespace collapsed."""
        content = document(paragraph(text("Party bus")), paragraph(text("rentals")))
        assert excerpt(content) == "Party bus rentals"

    def test_truncates_on_word_boundary(self) -> None:
        """Long text is cut at a word boundary with an ellipsis."""
        content = document(paragraph(text("The quick brown fox jumps over the lazy dog")))
        assert excerpt(content, max_length=20) == "The quick brown fox…"

    def test_html_string(self) -> None:
        """HTML strings are reduced to their visible text."""
        assert excerpt("<p>Hello <strong>there</strong></p>\n<p>friend</p>") == "Hello there friend"

    def test_blocks(self) -> None:
        """Portable Text blocks are accepted directly."""
        blocks = convert(document(paragraph(text("one")), paragraph(text("two"))))
        assert excerpt(blocks) == "one two"

    def test_invalid_length(self) -> None:
        """max_length must be positive."""
        with pytest.raises(ValueError, match="max_length"):
            excerpt("x", max_length=0)

    def test_single_long_word(self) -> None:
        """A word longer than the limit is hard-cut."""
        assert excerpt("abcdefghij", max_length=5) == "abcd…"


class TestHtmlUtils:
    """Tests for html_utils helpers."""

    def test_escape_attr(self) -> None:
        """Attribute escaping covers quotes, ampersands and angle brackets."""
        assert escape_attr('a&b"c<d>\'') == "a&amp;b&quot;c&lt;d&gt;&#x27;"

    def test_escape_text_keeps_quotes(self) -> None:
        """Text escaping leaves quotes readable."""
        assert escape_text('"a" & <b>') == '"a" &amp; &lt;b&gt;'

    def test_visible_text(self) -> None:
        """Tags are stripped and entities decoded."""
        assert visible_text('<p>a &amp; <a href="/x">b</a></p>') == "a & b"

    def test_visible_text_empty(self) -> None:
        """Empty fragments have no text."""
        assert visible_text("") == ""

    def test_normalize_whitespace(self) -> None:
        """Runs of whitespace collapse to single spaces."""
        assert normalize_whitespace("  a\n\n b\t c ") == "a b c"
