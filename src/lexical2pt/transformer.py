"""Convert Lexical rich-text JSON into Portable Text blocks."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from lexical2pt.config import DEFAULT_BLOCK_STYLE, DEFAULT_HEADING_STYLE
from lexical2pt.exceptions import ConversionError
from lexical2pt.keys import KeyGenerator, default_key_generator
from lexical2pt.schemas.lexical import (
    HEADING_TAGS,
    IS_BOLD,
    IS_CODE,
    IS_ITALIC,
    IS_STRIKETHROUGH,
    IS_UNDERLINE,
    HeadingNode,
    LexicalNode,
    LineBreakNode,
    LinkNode,
    ListItemNode,
    ListNode,
    ParagraphNode,
    QuoteNode,
    TextNode,
    parse_node,
)
from lexical2pt.schemas.portable_text import Block, BlockChild, Break, MarkDef, Span

logger = logging.getLogger(__name__)

# Canonical decorator order for spans.
FORMAT_TO_MARK: tuple[tuple[int, str], ...] = (
    (IS_BOLD, "strong"),
    (IS_ITALIC, "em"),
    (IS_STRIKETHROUGH, "strike-through"),
    (IS_UNDERLINE, "underline"),
    (IS_CODE, "code"),
)


def format_to_marks(format_flags: int) -> list[str]:
    """Decode a Lexical format bitmask into Portable Text decorator names."""
    return [mark for flag, mark in FORMAT_TO_MARK if format_flags & flag]


@dataclass
class _InlineBuilder:
    """Spans, breaks and mark definitions collected for a single block."""

    keys: KeyGenerator
    children: list[BlockChild] = field(default_factory=list)
    mark_defs: list[MarkDef] = field(default_factory=list)

    def add_nodes(self, nodes: Iterable[LexicalNode], inherited_marks: list[str] | None = None) -> None:
        marks = inherited_marks or []
        for node in nodes:
            if isinstance(node, TextNode):
                self.children.append(
                    Span(
                        key=self.keys.next_key(),
                        text=node.text,
                        marks=[*marks, *format_to_marks(node.format_flags)],
                    )
                )
            elif isinstance(node, LineBreakNode):
                self.children.append(Break(key=self.keys.next_key()))
            elif isinstance(node, LinkNode):
                # Nested links are flattened: inner text carries every enclosing link key.
                mark_key = self.keys.next_key()
                mark_def = MarkDef(type="link", key=mark_key, href=node.href)
                if node.opens_in_new_tab:
                    mark_def.blank = True
                def_position = len(self.mark_defs)
                first_child = len(self.children)
                self.add_nodes(node.children, [*marks, mark_key])
                # A link without text descendants leaves no span to reference its markDef.
                if any(
                    isinstance(child, Span) and mark_key in child.marks
                    for child in self.children[first_child:]
                ):
                    self.mark_defs.insert(def_position, mark_def)
            elif node.children:
                self.add_nodes(node.children, marks)

    def build(self, style: str, *, list_item: str | None = None, level: int | None = None) -> Block:
        children = self.children or [Span(key=self.keys.next_key(), text="", marks=[])]
        return Block(
            key=self.keys.next_key(),
            style=style,
            mark_defs=self.mark_defs,
            children=children,
            list_item=list_item,
            level=level,
        )


def _inline_block(
    nodes: Iterable[LexicalNode],
    keys: KeyGenerator,
    style: str = DEFAULT_BLOCK_STYLE,
    *,
    list_item: str | None = None,
    level: int | None = None,
) -> Block:
    builder = _InlineBuilder(keys)
    builder.add_nodes(nodes)
    return builder.build(style, list_item=list_item, level=level)


def _heading_style(node: HeadingNode) -> str:
    if node.tag in HEADING_TAGS:
        return node.tag
    return DEFAULT_HEADING_STYLE


def _convert_block(node: LexicalNode, keys: KeyGenerator, level: int = 0) -> list[Block]:
    if isinstance(node, ParagraphNode):
        return [_inline_block(node.children, keys)]

    if isinstance(node, HeadingNode):
        return [_inline_block(node.children, keys, _heading_style(node))]

    if isinstance(node, QuoteNode):
        return [_inline_block(node.children, keys, "blockquote")]

    if isinstance(node, ListNode):
        blocks: list[Block] = []
        for child in node.children:
            if isinstance(child, ListItemNode):
                blocks.extend(_convert_list_item(child, node.kind, level + 1, keys))
            else:
                blocks.extend(_convert_block(child, keys, level))
        return blocks

    if isinstance(node, ListItemNode):
        # A list item outside of a list.
        return _convert_list_item(node, "bullet", level + 1, keys)

    if isinstance(node, (LinkNode, TextNode)):
        return [_inline_block([node], keys)]

    if isinstance(node, LineBreakNode):
        return [
            Block(
                key=keys.next_key(),
                style=DEFAULT_BLOCK_STYLE,
                children=[Break(key=keys.next_key())],
            )
        ]

    # Root or an unknown wrapper.
    blocks = []
    for child in node.children:
        blocks.extend(_convert_block(child, keys, level))
    return blocks


def _convert_list_item(
    node: ListItemNode, list_kind: str, level: int, keys: KeyGenerator
) -> list[Block]:
    """Expand a list item into its own block followed by its nested list blocks."""
    inline_nodes: list[LexicalNode] = []
    nested_lists: list[LexicalNode] = []
    for child in node.children:
        if isinstance(child, ListNode):
            nested_lists.append(child)
        else:
            inline_nodes.append(child)

    blocks = [_inline_block(inline_nodes, keys, list_item=list_kind, level=level)]
    for nested in nested_lists:
        blocks.extend(_convert_block(nested, keys, level))
    return blocks


def _root_children(document: Any) -> list[Any] | None:
    if not isinstance(document, dict):
        return None
    root = document.get("root")
    if not isinstance(root, dict):
        return None
    children = root.get("children")
    if not isinstance(children, list):
        return None
    return children


def convert(
    document: Any,
    *,
    key_generator: KeyGenerator | None = None,
    strict: bool = False,
) -> list[Block]:
    """Convert a Lexical JSON document (``{"root": {"children": [...]}}``) to blocks.

    Malformed or absent documents yield an empty list. Each top-level node is
    converted independently: a node that fails is logged and skipped so the
    rest of the document still converts.

    Args:
        document: Raw Lexical JSON, typically decoded from a CMS field.
        key_generator: Generator for block/span/markDef keys. Defaults to the
            process-wide generator.
        strict: If True, raise instead of skipping a failing node.

    Returns:
        Portable Text blocks in reading order.

    Raises:
        ConversionError: Only when ``strict`` is True and a node fails.
    """
    children = _root_children(document)
    if children is None:
        return []

    keys = key_generator or default_key_generator()
    blocks: list[Block] = []
    for index, raw_node in enumerate(children):
        try:
            node = parse_node(raw_node)
            blocks.extend(_convert_block(node, keys))
        except Exception as exc:
            node_type = raw_node.get("type") if isinstance(raw_node, dict) else type(raw_node).__name__
            if strict:
                raise ConversionError(
                    f"Failed to convert top-level node {index} (type={node_type!r}): {exc}"
                ) from exc
            logger.exception(
                "Skipping top-level node %d (type=%r) that failed to convert", index, node_type
            )
    return blocks
