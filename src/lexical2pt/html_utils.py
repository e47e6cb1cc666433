"""Shared HTML utilities for rendering and reading rich text."""

from __future__ import annotations

import html
import re

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML parsing (pip install beautifulsoup4)."
    ) from exc


def escape_text(value: str) -> str:
    """Escape text for an HTML text node."""
    return html.escape(value, quote=False)


def escape_attr(value: str) -> str:
    """Escape a string for use inside a double-quoted attribute value."""
    return html.escape(value, quote=True)


def visible_text(fragment: str) -> str:
    """Return the text a reader would see in an HTML fragment, tags stripped."""
    if not fragment:
        return ""
    soup = BeautifulSoup(fragment, "lxml")
    return soup.get_text()


def normalize_whitespace(text: str) -> str:
    return re.sub(r"\s+", " ", text).strip()
