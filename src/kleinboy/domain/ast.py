"""Document tree — a tagged variant over markdown node kinds.

Node type names follow the mdast vocabulary (``text``, ``inlineCode``,
``code``, ``image``, ``heading``, ``yaml``, ``toml`` ...) so the JSON dump
of a tree reads like any other unist document.

Traversals pattern-match on the concrete class:

- ``Text`` / ``InlineCode``: literal leaves with a ``value``.
- ``Code`` / ``Image``: payload leaves that never leak into summaries.
- ``Heading`` / ``Parent``: containers with ordered ``children``.
- ``Frontmatter``: the raw metadata block (``yaml`` or ``toml``).
- ``Html`` / ``Leaf``: everything else; contributes no text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Literal


@dataclass(frozen=True)
class Text:
    value: str

    type: ClassVar[str] = "text"


@dataclass(frozen=True)
class InlineCode:
    value: str

    type: ClassVar[str] = "inlineCode"


@dataclass(frozen=True)
class Code:
    value: str
    lang: str | None = None

    type: ClassVar[str] = "code"


@dataclass(frozen=True)
class Image:
    url: str
    alt: str = ""
    title: str | None = None

    type: ClassVar[str] = "image"


@dataclass(frozen=True)
class Html:
    value: str

    type: ClassVar[str] = "html"


@dataclass(frozen=True)
class Frontmatter:
    """Raw metadata block found at the top of a document."""

    type: Literal["yaml", "toml"]
    value: str


@dataclass(frozen=True)
class Leaf:
    """Childless node without a literal value (thematic break, hard break)."""

    type: str


@dataclass(frozen=True)
class Heading:
    depth: int
    children: list[Node] = field(default_factory=list)

    type: ClassVar[str] = "heading"


@dataclass(frozen=True)
class Parent:
    """Generic container: root, paragraph, emphasis, link, list, table ..."""

    type: str
    children: list[Node] = field(default_factory=list)
    attrs: dict[str, Any] = field(default_factory=dict)


Node = Text | InlineCode | Code | Image | Html | Frontmatter | Leaf | Heading | Parent


def children_of(node: Node) -> list[Node] | None:
    """Return the ordered children of a container, or None for leaves."""
    match node:
        case Heading(children=children) | Parent(children=children):
            return children
        case _:
            return None


def node_to_dict(node: Node) -> dict[str, Any]:
    """Serialize a node (recursively) to a JSON-compatible dict.

    ``None`` attributes and empty ``attrs`` are omitted.
    """
    data: dict[str, Any] = {"type": node.type}
    match node:
        case Text(value=value) | InlineCode(value=value) | Html(value=value):
            data["value"] = value
        case Frontmatter(value=value):
            data["value"] = value
        case Code(value=value, lang=lang):
            if lang is not None:
                data["lang"] = lang
            data["value"] = value
        case Image(url=url, alt=alt, title=title):
            data["url"] = url
            data["alt"] = alt
            if title is not None:
                data["title"] = title
        case Heading(depth=depth, children=children):
            data["depth"] = depth
            data["children"] = [node_to_dict(c) for c in children]
        case Parent(children=children, attrs=attrs):
            if attrs:
                data.update(attrs)
            data["children"] = [node_to_dict(c) for c in children]
        case Leaf():
            pass
    return data
