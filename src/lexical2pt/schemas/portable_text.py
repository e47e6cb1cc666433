"""Portable Text block models.

Field names follow Python conventions; the Portable Text wire names
(``_type``, ``_key``, ``markDefs``, ``listItem``) are used as aliases, so
``model_dump(by_alias=True)`` produces documents a Portable Text consumer
accepts as-is.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator

from lexical2pt.config import DEFAULT_BLOCK_STYLE


class _PortableTextModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class Span(_PortableTextModel):
    """A run of text sharing one set of marks."""

    type: Literal["span"] = Field("span", alias="_type")
    key: str = Field("", alias="_key")
    text: str = ""
    marks: list[str] = Field(default_factory=list)

    @field_validator("text", mode="before")
    @classmethod
    def _none_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("marks", mode="before")
    @classmethod
    def _none_marks(cls, value: Any) -> Any:
        return [] if value is None else value


class Break(_PortableTextModel):
    """A hard line break inside a block."""

    type: Literal["break"] = Field("break", alias="_type")
    key: str = Field("", alias="_key")


class UnknownChild(_PortableTextModel):
    """An inline child of a kind this package does not model."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str | None = Field(None, alias="_type")
    key: str = Field("", alias="_key")
    text: str | None = None


class MarkDef(_PortableTextModel):
    """Out-of-line mark data referenced by key from spans (e.g. a link)."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    type: str = Field(..., alias="_type")
    key: str = Field("", alias="_key")
    href: str | None = None
    blank: bool | None = None


def _child_tag(value: Any) -> str | None:
    if isinstance(value, dict):
        child_type = value.get("_type")
    elif isinstance(value, BaseModel):
        child_type = getattr(value, "type", None)
    else:
        return None
    if child_type in ("span", "break"):
        return child_type
    return "unknown"


BlockChild = Annotated[
    Union[
        Annotated[Span, Tag("span")],
        Annotated[Break, Tag("break")],
        Annotated[UnknownChild, Tag("unknown")],
    ],
    Discriminator(_child_tag),
]


class Block(_PortableTextModel):
    """One semantic block: a paragraph, heading, blockquote or list item."""

    type: Literal["block"] = Field("block", alias="_type")
    key: str = Field("", alias="_key")
    style: str | None = DEFAULT_BLOCK_STYLE
    mark_defs: list[MarkDef] = Field(default_factory=list, alias="markDefs")
    children: list[BlockChild] = Field(default_factory=list)
    list_item: str | None = Field(None, alias="listItem")
    level: int | None = None

    @field_validator("mark_defs", "children", mode="before")
    @classmethod
    def _none_lists(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_list_item(self) -> bool:
        return self.list_item is not None

    def to_portable_text(self) -> dict[str, Any]:
        """Serialize with Portable Text field names, omitting unset options."""
        return self.model_dump(by_alias=True, exclude_none=True)


def dump_blocks(blocks: list[Block]) -> list[dict[str, Any]]:
    """Serialize a block list to plain Portable Text dicts."""
    return [block.to_portable_text() for block in blocks]
