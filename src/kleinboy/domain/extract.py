"""Text extraction over the document tree — titles, descriptions, images.

Pure functions; nothing here touches the filesystem.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterator

from kleinboy.domain.ast import Code, Heading, Image, InlineCode, Node, Text, children_of

PLACEHOLDER = "..."
DEFAULT_MAX_LENGTH = 200
DEFAULT_ELLIPSIS = "..."

_WHITESPACE = re.compile(r"\s+")


def find_texts(
    node: Node,
    visitor: Callable[[Node], bool] | None = None,
) -> Iterator[str]:
    """Yield the text fragments of *node* in depth-first document order.

    Text and inline code leaves yield their literal value.  Code blocks and
    images yield :data:`PLACEHOLDER` so their payload never reaches a
    summary.  Other childless nodes (inline HTML, breaks) yield nothing.

    Args:
        node: Subtree to walk.
        visitor: Called before descending into each node; returning False
            prunes that subtree.
    """
    if visitor is not None and not visitor(node):
        return
    match node:
        case Text(value=value) | InlineCode(value=value):
            yield value
        case Code() | Image():
            yield PLACEHOLDER
        case _:
            for child in children_of(node) or ():
                yield from find_texts(child, visitor)


def extract_title(node: Node) -> str | None:
    """Return the texts of the first heading (depth-first), space-joined.

    Returns None when the tree has no heading at all.
    """
    if isinstance(node, Heading):
        return " ".join(find_texts(node))
    for child in children_of(node) or ():
        title = extract_title(child)
        if title is not None:
            return title
    return None


def _skip_headings(node: Node) -> bool:
    return not isinstance(node, Heading)


def extract_description(
    node: Node,
    *,
    max_length: int = DEFAULT_MAX_LENGTH,
    ellipsis: str = DEFAULT_ELLIPSIS,
) -> str:
    """Summarize the non-heading text of *node*.

    Whitespace runs collapse to a single space.  Sources longer than
    *max_length* are cut to ``max_length - len(ellipsis)`` characters and
    suffixed with *ellipsis*; the cut is not word-aware.
    """
    source = " ".join(find_texts(node, _skip_headings))
    source = _WHITESPACE.sub(" ", source).strip()
    if len(source) <= max_length:
        return source
    return source[: max(max_length - len(ellipsis), 0)] + ellipsis


def extract_images(node: Node) -> list[str]:
    """Collect every image URL in document order, duplicates included."""
    if isinstance(node, Image):
        return [node.url]
    images: list[str] = []
    for child in children_of(node) or ():
        images.extend(extract_images(child))
    return images
