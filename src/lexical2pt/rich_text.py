"""Convenience entry points for content that may be Lexical, Portable Text or HTML."""

from __future__ import annotations

from typing import Any

from lexical2pt.config import LEXICAL2PT_EXCERPT_MAX_LENGTH
from lexical2pt.html_utils import normalize_whitespace, visible_text
from lexical2pt.renderer import render_to_html, render_to_plain_html, to_plain_text
from lexical2pt.transformer import convert

_ELLIPSIS = "…"


def render_rich_text(content: Any, *, plain: bool = False) -> str:
    """Render stored rich-text content to HTML.

    Strings are treated as already-rendered HTML and returned unchanged, dicts
    as Lexical documents, and lists as Portable Text blocks.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, dict):
        content = convert(content)
    if not isinstance(content, list):
        return ""
    return render_to_plain_html(content) if plain else render_to_html(content)


def _plain_text(content: Any) -> str:
    if isinstance(content, str):
        return visible_text(content)
    if isinstance(content, dict):
        return to_plain_text(convert(content))
    return to_plain_text(content)


def excerpt(content: Any, max_length: int = LEXICAL2PT_EXCERPT_MAX_LENGTH) -> str:
    """Plain-text summary of rich-text content, e.g. for a meta description.

    Whitespace is collapsed. Text longer than ``max_length`` is cut at the last
    word boundary that fits and suffixed with an ellipsis.
    """
    if max_length <= 0:
        raise ValueError(f"max_length must be positive, got {max_length}")
    text = normalize_whitespace(_plain_text(content))
    if len(text) <= max_length:
        return text
    cut = text[: max_length - len(_ELLIPSIS)]
    if " " in cut and text[len(cut)] != " ":
        cut = cut[: cut.rfind(" ")]
    return cut.rstrip(" ,;:.") + _ELLIPSIS
