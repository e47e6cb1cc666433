"""HTML component tables used by the Portable Text renderer.

A table maps block styles, list kinds and marks to small functions that wrap
already-rendered children. Two tables ship with the package: one carrying the
site's utility classes and one with bare tags for email-like contexts.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Callable

from lexical2pt.config import DEFAULT_LINK_HREF
from lexical2pt.exceptions import ComponentError
from lexical2pt.html_utils import escape_attr
from lexical2pt.schemas.portable_text import MarkDef

WrapFn = Callable[[str], str]
MarkFn = Callable[[str, MarkDef | None], str]

DECORATOR_ORDER = ("strong", "em", "strike-through", "underline", "code")

_NEW_TAB_ATTRS = ' target="_blank" rel="noopener noreferrer"'


@dataclass(frozen=True)
class HtmlComponents:
    """Rendering table for blocks, lists, list items and marks."""

    block: dict[str, WrapFn] = field(default_factory=dict)
    lists: dict[str, WrapFn] = field(default_factory=dict)
    list_items: dict[str, WrapFn] = field(default_factory=dict)
    marks: dict[str, MarkFn] = field(default_factory=dict)
    hard_break: str = "<br/>"


def _tag(name: str, css_class: str | None = None) -> WrapFn:
    open_tag = f'<{name} class="{css_class}">' if css_class else f"<{name}>"
    close_tag = f"</{name}>"

    def wrap(children: str) -> str:
        return f"{open_tag}{children}{close_tag}"

    return wrap


def _decorator(name: str) -> MarkFn:
    wrap = _tag(name)

    def render(children: str, mark_def: MarkDef | None) -> str:
        return wrap(children)

    return render


def _link(css_class: str | None = None) -> MarkFn:
    class_attr = f' class="{css_class}"' if css_class else ""

    def render(children: str, mark_def: MarkDef | None) -> str:
        href = DEFAULT_LINK_HREF
        blank = False
        if mark_def is not None:
            href = mark_def.href if mark_def.href is not None else DEFAULT_LINK_HREF
            blank = bool(mark_def.blank)
        target = _NEW_TAB_ATTRS if blank else ""
        return f'<a href="{escape_attr(href)}"{class_attr}{target}>{children}</a>'

    return render


def _decorators() -> dict[str, MarkFn]:
    return {
        "strong": _decorator("strong"),
        "em": _decorator("em"),
        "underline": _decorator("u"),
        "strike-through": _decorator("s"),
        "code": _decorator("code"),
    }


DEFAULT_COMPONENTS = HtmlComponents(
    block={
        "normal": _tag("p", "mb-4"),
        "h1": _tag("h1", "text-4xl font-bold mb-6 mt-8"),
        "h2": _tag("h2", "text-3xl font-bold mb-5 mt-7"),
        "h3": _tag("h3", "text-2xl font-bold mb-4 mt-6"),
        "h4": _tag("h4", "text-xl font-bold mb-3 mt-5"),
        "h5": _tag("h5", "text-lg font-bold mb-2 mt-4"),
        "h6": _tag("h6", "text-base font-bold mb-2 mt-3"),
        "blockquote": _tag("blockquote", "border-l-4 border-primary pl-4 italic my-4"),
    },
    lists={
        "bullet": _tag("ul", "list-disc list-inside mb-4 ml-4"),
        "number": _tag("ol", "list-decimal list-inside mb-4 ml-4"),
    },
    list_items={
        "bullet": _tag("li", "mb-2"),
        "number": _tag("li", "mb-2"),
    },
    marks={
        **_decorators(),
        "link": _link("text-primary hover:text-primary-dark underline"),
    },
)

PLAIN_COMPONENTS = HtmlComponents(
    block={
        "normal": _tag("p"),
        **{style: _tag(style) for style in ("h1", "h2", "h3", "h4", "h5", "h6")},
        "blockquote": _tag("blockquote"),
    },
    lists={"bullet": _tag("ul"), "number": _tag("ol")},
    list_items={"bullet": _tag("li"), "number": _tag("li")},
    marks={**_decorators(), "link": _link()},
)

_TABLES = ("block", "lists", "list_items", "marks")


def merge_components(base: HtmlComponents, **overrides: dict | str) -> HtmlComponents:
    """Return a copy of ``base`` with per-entry overrides applied.

    Example:
        merge_components(PLAIN_COMPONENTS, block={"normal": lambda c: f"<div>{c}</div>"})

    Raises:
        ComponentError: If an override names an unknown table or has the wrong type.
    """
    changes: dict[str, dict | str] = {}
    for name, value in overrides.items():
        if name == "hard_break":
            if not isinstance(value, str):
                raise ComponentError("hard_break override must be a string")
            changes[name] = value
            continue
        if name not in _TABLES:
            raise ComponentError(f"Unknown component table: {name!r}")
        if not isinstance(value, dict):
            raise ComponentError(f"Override for {name!r} must be a dict of callables")
        for key, fn in value.items():
            if not callable(fn):
                raise ComponentError(f"Component {name}[{key!r}] is not callable")
        changes[name] = {**getattr(base, name), **value}
    return replace(base, **changes)
