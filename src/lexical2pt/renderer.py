"""Render Portable Text blocks to HTML.

Used where a UI framework renderer is unavailable: email bodies, feeds and
meta descriptions. Accepts blocks produced by :func:`lexical2pt.convert` or
raw Portable Text dicts fetched from a content store.

Degradation rules:
    * Items whose ``_type`` is not ``block`` render their inline children
      without a wrapper; if they have no children they are skipped.
    * Blocks that fail validation are skipped and logged.
    * Unknown block styles render with the ``normal`` wrapper.
    * Unknown list kinds render with the ``bullet`` wrappers.
    * Unknown marks render their text without a wrapper.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Union

from pydantic import ValidationError

from lexical2pt.components import (
    DECORATOR_ORDER,
    DEFAULT_COMPONENTS,
    PLAIN_COMPONENTS,
    HtmlComponents,
    WrapFn,
)
from lexical2pt.config import DEFAULT_BLOCK_STYLE
from lexical2pt.html_utils import escape_text
from lexical2pt.schemas.portable_text import Block, Break, MarkDef, Span

logger = logging.getLogger(__name__)


@dataclass
class _BareBlock:
    """Inline content of an item with an unrecognised ``_type``."""

    block: Block


@dataclass
class _ListItem:
    block: Block
    sublists: list[_ListGroup] = field(default_factory=list)


@dataclass
class _ListGroup:
    kind: str
    level: int
    items: list[_ListItem] = field(default_factory=list)


_Segment = Union[Block, _BareBlock, _ListGroup]


def _identity(children: str) -> str:
    return children


def _coerce_items(items: Iterable[Any]) -> list[Block | _BareBlock]:
    coerced: list[Block | _BareBlock] = []
    for index, item in enumerate(items):
        if isinstance(item, Block):
            coerced.append(item)
            continue
        if not isinstance(item, dict):
            logger.debug("Skipping non-mapping item %d of type %s", index, type(item).__name__)
            continue
        item_type = item.get("_type")
        if item_type != "block" and not isinstance(item.get("children"), list):
            logger.debug("Skipping item %d with unsupported type %r", index, item_type)
            continue
        try:
            block = Block.model_validate({**item, "_type": "block"})
        except ValidationError as exc:
            logger.warning("Skipping malformed block %d: %s", index, exc)
            continue
        coerced.append(block if item_type == "block" else _BareBlock(block))
    return coerced


def _group_lists(items: list[Block | _BareBlock]) -> list[_Segment]:
    """Fold flat list-item blocks into nested list groups.

    The stack holds the currently open groups, outermost first. A list item
    joins the open group of the same kind and level, opens a nested group
    under the previous item when it is deeper, and closes groups when it is
    shallower or of another kind. Any other block closes every group.
    """
    output: list[_Segment] = []
    stack: list[_ListGroup] = []
    for item in items:
        if isinstance(item, _BareBlock) or not item.is_list_item:
            stack.clear()
            output.append(item)
            continue

        kind = item.list_item
        level = max(item.level or 1, 1)
        while stack and stack[-1].level > level:
            stack.pop()
        if stack and stack[-1].level == level and stack[-1].kind != kind:
            stack.pop()

        list_item = _ListItem(item)
        if stack and stack[-1].level == level:
            stack[-1].items.append(list_item)
            continue

        group = _ListGroup(kind=kind, level=level, items=[list_item])
        if stack:
            stack[-1].items[-1].sublists.append(group)
        else:
            output.append(group)
        stack.append(group)
    return output


def _ordered_marks(marks: list[str], mark_defs: dict[str, MarkDef]) -> list[str]:
    """Outermost first: annotations, canonical decorators, then anything else."""
    unique = list(dict.fromkeys(marks))
    annotations = [mark for mark in unique if mark in mark_defs]
    decorators = [mark for mark in DECORATOR_ORDER if mark in unique and mark not in mark_defs]
    others = [mark for mark in unique if mark not in mark_defs and mark not in DECORATOR_ORDER]
    return annotations + decorators + others


def _render_span(span: Span, mark_defs: dict[str, MarkDef], components: HtmlComponents) -> str:
    html = escape_text(span.text)
    for mark in reversed(_ordered_marks(span.marks, mark_defs)):
        mark_def = mark_defs.get(mark)
        name = mark_def.type if mark_def is not None else mark
        render = components.marks.get(name)
        if render is None:
            continue
        html = render(html, mark_def)
    return html


def _render_inline(block: Block, components: HtmlComponents) -> str:
    mark_defs = {mark_def.key: mark_def for mark_def in block.mark_defs}
    parts: list[str] = []
    for child in block.children:
        if isinstance(child, Span):
            parts.append(_render_span(child, mark_defs, components))
        elif isinstance(child, Break):
            parts.append(components.hard_break)
        elif child.text:
            parts.append(escape_text(child.text))
    return "".join(parts)


def _block_wrapper(style: str | None, components: HtmlComponents) -> WrapFn:
    wrap = components.block.get(style or DEFAULT_BLOCK_STYLE)
    if wrap is None:
        logger.debug("No component for block style %r, using %r", style, DEFAULT_BLOCK_STYLE)
        wrap = components.block.get(DEFAULT_BLOCK_STYLE, _identity)
    return wrap


def _list_wrappers(kind: str, components: HtmlComponents) -> tuple[WrapFn, WrapFn]:
    list_wrap = components.lists.get(kind) or components.lists.get("bullet", _identity)
    item_wrap = components.list_items.get(kind) or components.list_items.get("bullet", _identity)
    return list_wrap, item_wrap


def _render_list(group: _ListGroup, components: HtmlComponents) -> str:
    list_wrap, item_wrap = _list_wrappers(group.kind, components)
    items: list[str] = []
    for item in group.items:
        content = _render_inline(item.block, components)
        if item.block.style and item.block.style != DEFAULT_BLOCK_STYLE:
            content = _block_wrapper(item.block.style, components)(content)
        nested = "".join(_render_list(sublist, components) for sublist in item.sublists)
        items.append(item_wrap(content + nested))
    return list_wrap("".join(items))


def _render_segment(segment: _Segment, components: HtmlComponents) -> str:
    if isinstance(segment, _ListGroup):
        return _render_list(segment, components)
    if isinstance(segment, _BareBlock):
        return _render_inline(segment.block, components)
    return _block_wrapper(segment.style, components)(_render_inline(segment, components))


def _is_renderable(blocks: Any) -> bool:
    return bool(blocks) and isinstance(blocks, (list, tuple))


def render_to_html(blocks: Any, *, components: HtmlComponents = DEFAULT_COMPONENTS) -> str:
    """Render Portable Text blocks to an HTML fragment.

    Args:
        blocks: Block models or raw Portable Text dicts.
        components: Rendering table; defaults to the styled site table.

    Returns:
        The HTML string, or ``""`` for falsy, non-list or empty input.
    """
    if not _is_renderable(blocks):
        return ""
    segments = _group_lists(_coerce_items(blocks))
    return "".join(_render_segment(segment, components) for segment in segments)


def render_to_plain_html(blocks: Any) -> str:
    """Render blocks with bare tags and no class attributes."""
    return render_to_html(blocks, components=PLAIN_COMPONENTS)


def to_plain_text(blocks: Any) -> str:
    """Concatenate span text per block; blocks are separated by a blank line."""
    if not _is_renderable(blocks):
        return ""
    texts: list[str] = []
    for item in _coerce_items(blocks):
        block = item.block if isinstance(item, _BareBlock) else item
        texts.append(
            "".join(
                child.text
                for child in block.children
                if not isinstance(child, Break) and child.text
            )
        )
    return "\n\n".join(texts)
