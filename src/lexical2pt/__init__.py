"""lexical2pt: convert Lexical rich text to Portable Text and render it to HTML."""

from lexical2pt.components import (
    DEFAULT_COMPONENTS,
    PLAIN_COMPONENTS,
    HtmlComponents,
    merge_components,
)
from lexical2pt.exceptions import (
    ComponentError,
    ConversionError,
    Lexical2ptError,
    RenderError,
)
from lexical2pt.keys import KeyGenerator, reset_key_counter
from lexical2pt.renderer import render_to_html, render_to_plain_html, to_plain_text
from lexical2pt.rich_text import excerpt, render_rich_text
from lexical2pt.schemas import Block, Break, MarkDef, Span, dump_blocks
from lexical2pt.transformer import convert

__all__ = [
    "Block",
    "Break",
    "ComponentError",
    "ConversionError",
    "DEFAULT_COMPONENTS",
    "HtmlComponents",
    "KeyGenerator",
    "Lexical2ptError",
    "MarkDef",
    "PLAIN_COMPONENTS",
    "RenderError",
    "Span",
    "convert",
    "dump_blocks",
    "excerpt",
    "merge_components",
    "render_rich_text",
    "render_to_html",
    "render_to_plain_html",
    "reset_key_counter",
    "to_plain_text",
]
