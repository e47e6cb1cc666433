"""Lexical rich-text node models.

Nodes form a tagged union discriminated by the ``type`` field. Types that are
not modelled explicitly validate into :class:`UnknownNode`, which keeps its
children so their content can pass through conversion.

Scalar fields are coerced leniently (a non-integer format is 0, a numeric url
becomes a string, a non-string heading tag is dropped). Only shapes that
cannot be walked, such as children that are not a list of objects, fail
validation.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)

from lexical2pt.config import DEFAULT_LINK_HREF

# Lexical text format bitmask flags.
IS_BOLD = 1
IS_ITALIC = 1 << 1
IS_STRIKETHROUGH = 1 << 2
IS_UNDERLINE = 1 << 3
IS_CODE = 1 << 4

HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})

_NODE_TAGS = {
    "text": "text",
    "linebreak": "linebreak",
    "link": "link",
    "autolink": "link",
    "paragraph": "paragraph",
    "heading": "heading",
    "quote": "quote",
    "list": "list",
    "listitem": "listitem",
    "root": "root",
}


def _url_or_none(value: Any) -> str | None:
    if value is None or isinstance(value, str):
        return value
    return str(value)


def _str_or_none(value: Any) -> str | None:
    return value if isinstance(value, str) else None


class _LexicalModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class _ElementNode(_LexicalModel):
    children: list[LexicalNode] = Field(default_factory=list)

    @field_validator("children", mode="before")
    @classmethod
    def _none_children(cls, value: Any) -> Any:
        return [] if value is None else value


class TextNode(_LexicalModel):
    """A run of text with a format bitmask."""

    type: Literal["text"] = "text"
    text: str = ""
    format: int = 0

    @field_validator("text", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return value if isinstance(value, str) else str(value)

    @field_validator("format", mode="before")
    @classmethod
    def _coerce_format(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            return 0
        return value

    @property
    def format_flags(self) -> int:
        return self.format


class LineBreakNode(_LexicalModel):
    type: Literal["linebreak"] = "linebreak"


class LinkFields(_LexicalModel):
    """Payload-style link fields (``fields.url`` / ``fields.newTab``)."""

    url: str | None = None
    new_tab: Any = Field(None, alias="newTab")

    @field_validator("url", mode="before")
    @classmethod
    def _coerce_url(cls, value: Any) -> str | None:
        return _url_or_none(value)


class LinkNode(_ElementNode):
    """A link or autolink wrapping inline children."""

    type: Literal["link", "autolink"] = "link"
    url: str | None = None
    new_tab: Any = Field(None, alias="newTab")
    fields: LinkFields | None = None

    @field_validator("url", mode="before")
    @classmethod
    def _coerce_url(cls, value: Any) -> str | None:
        return _url_or_none(value)

    @field_validator("fields", mode="before")
    @classmethod
    def _mapping_fields(cls, value: Any) -> Any:
        return value if isinstance(value, (dict, LinkFields)) else None

    @property
    def href(self) -> str:
        if self.fields is not None and self.fields.url is not None:
            return self.fields.url
        if self.url is not None:
            return self.url
        return DEFAULT_LINK_HREF

    @property
    def opens_in_new_tab(self) -> bool:
        if self.fields is not None and self.fields.new_tab is not None:
            return bool(self.fields.new_tab)
        return bool(self.new_tab)


class ParagraphNode(_ElementNode):
    type: Literal["paragraph"] = "paragraph"


class HeadingNode(_ElementNode):
    type: Literal["heading"] = "heading"
    tag: str | None = None

    @field_validator("tag", mode="before")
    @classmethod
    def _coerce_tag(cls, value: Any) -> str | None:
        return _str_or_none(value)


class QuoteNode(_ElementNode):
    type: Literal["quote"] = "quote"


class ListNode(_ElementNode):
    """A bullet or numbered list. Any other list type is treated as bullet."""

    type: Literal["list"] = "list"
    list_type: str | None = Field(None, alias="listType")

    @field_validator("list_type", mode="before")
    @classmethod
    def _coerce_list_type(cls, value: Any) -> str | None:
        return _str_or_none(value)

    @property
    def kind(self) -> Literal["bullet", "number"]:
        return "number" if self.list_type == "number" else "bullet"


class ListItemNode(_ElementNode):
    type: Literal["listitem"] = "listitem"


class RootNode(_ElementNode):
    type: Literal["root"] = "root"


class UnknownNode(_ElementNode):
    """Any node whose ``type`` is not modelled above."""

    type: Any = None


def _node_tag(value: Any) -> str | None:
    if isinstance(value, dict):
        node_type = value.get("type")
    elif isinstance(value, BaseModel):
        node_type = getattr(value, "type", None)
    else:
        return None
    if not isinstance(node_type, str):
        return "unknown"
    return _NODE_TAGS.get(node_type, "unknown")


LexicalNode = Annotated[
    Union[
        Annotated[TextNode, Tag("text")],
        Annotated[LineBreakNode, Tag("linebreak")],
        Annotated[LinkNode, Tag("link")],
        Annotated[ParagraphNode, Tag("paragraph")],
        Annotated[HeadingNode, Tag("heading")],
        Annotated[QuoteNode, Tag("quote")],
        Annotated[ListNode, Tag("list")],
        Annotated[ListItemNode, Tag("listitem")],
        Annotated[RootNode, Tag("root")],
        Annotated[UnknownNode, Tag("unknown")],
    ],
    Discriminator(_node_tag),
]

for _model in (
    LinkNode,
    ParagraphNode,
    HeadingNode,
    QuoteNode,
    ListNode,
    ListItemNode,
    RootNode,
    UnknownNode,
):
    _model.model_rebuild()

_node_adapter: TypeAdapter[LexicalNode] = TypeAdapter(LexicalNode)


def parse_node(raw: Any) -> LexicalNode:
    """Validate one raw Lexical node (and its subtree).

    Raises:
        pydantic.ValidationError: If the node or any descendant is malformed.
    """
    return _node_adapter.validate_python(raw)
