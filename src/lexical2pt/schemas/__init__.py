"""Shared schemas for lexical2pt."""

from lexical2pt.schemas.lexical import LexicalNode, parse_node
from lexical2pt.schemas.portable_text import (
    Block,
    BlockChild,
    Break,
    MarkDef,
    Span,
    UnknownChild,
    dump_blocks,
)

__all__ = [
    "Block",
    "BlockChild",
    "Break",
    "LexicalNode",
    "MarkDef",
    "Span",
    "UnknownChild",
    "dump_blocks",
    "parse_node",
]
