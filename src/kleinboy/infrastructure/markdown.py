"""Markdown pipeline — mistune tokens to the domain document tree, and HTML.

mistune has no frontmatter support, so a leading ``---`` (YAML) or
``+++`` (TOML) block is split off first and re-attached as the first
child of the root, where the tree consumers expect it.

The token list is kept on :class:`ParsedDocument` so the HTML transform
renders exactly what was parsed.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any

import mistune
from mistune.core import BlockState

from kleinboy.domain.ast import (
    Code,
    Frontmatter,
    Heading,
    Html,
    Image,
    InlineCode,
    Leaf,
    Node,
    Parent,
    Text,
)

logger = logging.getLogger(__name__)

PLUGINS: list[str] = ["strikethrough", "table", "url"]

_FRONTMATTER_PATTERNS: dict[str, re.Pattern[str]] = {
    "yaml": re.compile(r"\A---[ \t]*\n(.*?\n)?---[ \t]*(?:\n|\Z)", re.DOTALL),
    "toml": re.compile(r"\A\+\+\+[ \t]*\n(.*?\n)?\+\+\+[ \t]*(?:\n|\Z)", re.DOTALL),
}

# mistune token type -> mdast node type for generic containers.
_CONTAINER_TYPES: dict[str, str] = {
    "paragraph": "paragraph",
    "block_text": "paragraph",
    "emphasis": "emphasis",
    "strong": "strong",
    "strikethrough": "delete",
    "link": "link",
    "block_quote": "blockquote",
    "list": "list",
    "list_item": "listItem",
    "table": "table",
    "table_head": "tableHead",
    "table_body": "tableBody",
    "table_row": "tableRow",
    "table_cell": "tableCell",
}

_LEAF_TYPES: dict[str, str] = {
    "thematic_break": "thematicBreak",
    "linebreak": "break",
}

_SKIPPED_TYPES = frozenset({"blank_line"})


@dataclass(frozen=True)
class ParsedDocument:
    """A parsed markdown document: domain tree plus the raw token stream."""

    root: Parent
    tokens: list[dict[str, Any]]
    state: BlockState


def split_frontmatter(text: str) -> tuple[Frontmatter | None, str]:
    """Split a leading YAML/TOML frontmatter block from *text*.

    Returns ``(frontmatter_node, body)``; the node is None when the text
    does not open with a fenced block.
    """
    normalized = text.replace("\r\n", "\n")
    for fmt, pattern in _FRONTMATTER_PATTERNS.items():
        match = pattern.match(normalized)
        if match:
            value = (match.group(1) or "").removesuffix("\n")
            return Frontmatter(type=fmt, value=value), normalized[match.end() :]  # type: ignore[arg-type]
    return None, normalized


def _plain_text(tokens: list[dict[str, Any]]) -> str:
    """Flatten inline tokens to their raw text (image alt text)."""
    parts: list[str] = []
    for token in tokens:
        if "raw" in token:
            parts.append(token["raw"])
        elif "children" in token:
            parts.append(_plain_text(token["children"]))
    return "".join(parts)


def _convert(token: dict[str, Any]) -> Node | None:
    """Convert one mistune token into a domain node."""
    kind = token.get("type", "")
    attrs: dict[str, Any] = token.get("attrs") or {}
    children: list[dict[str, Any]] = token.get("children") or []

    if kind in _SKIPPED_TYPES:
        return None
    if kind == "text":
        return Text(value=token.get("raw", ""))
    if kind == "softbreak":
        return Text(value="\n")
    if kind == "codespan":
        return InlineCode(value=token.get("raw", ""))
    if kind == "block_code":
        return Code(value=token.get("raw", "").removesuffix("\n"), lang=attrs.get("info") or None)
    if kind == "image":
        return Image(url=attrs.get("url", ""), alt=_plain_text(children), title=attrs.get("title"))
    if kind == "heading":
        return Heading(depth=int(attrs.get("level", 1)), children=_convert_all(children))
    if kind in ("block_html", "inline_html"):
        return Html(value=token.get("raw", ""))
    if kind in _LEAF_TYPES:
        return Leaf(type=_LEAF_TYPES[kind])
    if kind in _CONTAINER_TYPES:
        return Parent(type=_CONTAINER_TYPES[kind], children=_convert_all(children), attrs=attrs)
    if children:
        return Parent(type=kind, children=_convert_all(children), attrs=attrs)
    logger.debug("Unhandled markdown token: %s", kind)
    return Leaf(type=kind)


def _convert_all(tokens: list[dict[str, Any]]) -> list[Node]:
    nodes: list[Node] = []
    for token in tokens:
        node = _convert(token)
        if node is not None:
            nodes.append(node)
    return nodes


class MarkdownPipeline:
    """Parse markdown into a :class:`ParsedDocument` and render it as HTML.

    One parser instance serves a whole run; mistune keeps per-document
    state in the ``BlockState`` it returns.
    """

    def __init__(self, plugins: list[str] | None = None) -> None:
        selected = list(PLUGINS if plugins is None else plugins)
        self._parser = mistune.create_markdown(renderer=None, plugins=selected)
        # A second instance so plugins register their HTML render methods.
        self._html = mistune.create_markdown(plugins=selected)

    def parse(self, text: str) -> ParsedDocument:
        frontmatter, body = split_frontmatter(text)
        tokens, state = self._parser.parse(body)
        assert isinstance(tokens, list)
        children = _convert_all(tokens)
        if frontmatter is not None:
            children.insert(0, frontmatter)
        return ParsedDocument(root=Parent(type="root", children=children), tokens=tokens, state=state)

    def render_html(self, document: ParsedDocument) -> str:
        renderer = self._html.renderer
        assert renderer is not None
        return renderer(document.tokens, document.state)
