"""Frontmatter model, discovery in the document tree, parsing, and merge.

Keys follow Jekyll's front matter (``layout``, ``published``, ``date``,
``category``, ``categories``, ``tags``) plus the ``x-kleinboy`` namespace,
whose fields take precedence over their top-level synonyms.  Any other key
is preserved in :attr:`FrontMatter.extra`.

Merge order: sidecar keys override inline keys, one level deep.
"""

from __future__ import annotations

import json
import tomllib
from datetime import date, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator, model_validator
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from kleinboy.domain.ast import Frontmatter, Node, children_of
from kleinboy.domain.errors import FrontmatterError

FrontmatterFormat = Literal["yaml", "toml", "json"]

NAMESPACE_KEY = "x-kleinboy"


def _new_yaml() -> YAML:
    """Create a fresh safe YAML loader (plain dicts and lists, no tags)."""
    return YAML(typ="safe", pure=True)


def _coerce_text(value: Any) -> str | None:
    """Normalize a scalar to the string the metadata carries.

    Containers and nulls have no text form and become None.
    """
    if value is None or isinstance(value, (list, dict)):
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _coerce_text_list(value: Any) -> list[str] | None:
    """A scalar becomes a one-element list; null entries are dropped."""
    if isinstance(value, list):
        return [text for text in map(_coerce_text, value) if text is not None]
    text = _coerce_text(value)
    return None if text is None else [text]


def _string_keys(data: dict[Any, Any]) -> dict[str, Any]:
    return {str(key): value for key, value in data.items()}


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class KleinboyFrontMatter(BaseModel):
    """The ``x-kleinboy`` namespace.

    Values of an unexpected shape are dropped rather than rejected.
    """

    model_config = {"frozen": True}

    status: str | None = None
    title: str | None = None
    description: str | None = None
    images: list[str] | None = None
    published_time: str | None = None
    modified_time: str | None = None

    @field_validator(
        "status", "title", "description", "published_time", "modified_time", mode="before"
    )
    @classmethod
    def _scalars(cls, value: Any) -> str | None:
        return _coerce_text(value)

    @field_validator("images", mode="before")
    @classmethod
    def _images(cls, value: Any) -> list[str] | None:
        return _coerce_text_list(value)


_EMPTY_NAMESPACE = KleinboyFrontMatter()


class FrontMatter(BaseModel):
    """Merged frontmatter of one article.

    An open mapping: validation never fails on a parsed document.  Jekyll
    keys that kleinboy does not interpret keep whatever value they had.
    """

    model_config = {"frozen": True}

    layout: Any = None
    published: Any = None
    date: str | None = None
    category: Any = None
    categories: Any = None
    tags: list[str] | None = None
    kleinboy: KleinboyFrontMatter | None = Field(default=None, alias=NAMESPACE_KEY)
    extra: dict[str, Any] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _collect_extra(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = _string_keys(data)
        known = {
            info.alias or name for name, info in cls.model_fields.items() if name != "extra"
        }
        result = {k: v for k, v in data.items() if k in known}
        result["extra"] = {k: v for k, v in data.items() if k not in known}
        return result

    @field_validator("date", mode="before")
    @classmethod
    def _date(cls, value: Any) -> str | None:
        return _coerce_text(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tags(cls, value: Any) -> list[str] | None:
        return _coerce_text_list(value)

    @field_validator("kleinboy", mode="before")
    @classmethod
    def _namespace(cls, value: Any) -> dict[str, Any] | None:
        return _string_keys(value) if isinstance(value, dict) else None

    @property
    def namespace(self) -> KleinboyFrontMatter:
        """The ``x-kleinboy`` namespace, empty when absent."""
        return self.kleinboy if self.kleinboy is not None else _EMPTY_NAMESPACE

    @property
    def published_time(self) -> str | None:
        value = self.namespace.published_time
        return value if value is not None else self.date

    @property
    def modified_time(self) -> str | None:
        value = self.namespace.modified_time
        return value if value is not None else self.date


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_frontmatter_text(
    text: str,
    fmt: FrontmatterFormat,
    *,
    source: str,
) -> dict[str, Any] | None:
    """Parse raw frontmatter text with the parser for *fmt*.

    Returns None when the document is empty (YAML ``""``, JSON ``null``).

    Raises:
        FrontmatterError: On a syntax error, or when the top level is not a
            mapping.
    """
    try:
        if fmt == "toml":
            data: Any = tomllib.loads(text)
        elif fmt == "json":
            data = json.loads(text)
        else:
            data = _new_yaml().load(text)
    except (YAMLError, tomllib.TOMLDecodeError, json.JSONDecodeError) as exc:
        raise FrontmatterError(source, str(exc), fmt=fmt) from exc

    if data is None:
        return None
    if not isinstance(data, dict):
        msg = f"expected a mapping, got {type(data).__name__}"
        raise FrontmatterError(source, msg, fmt=fmt)
    return data


def extract_inline_frontmatter(node: Node, *, source: str) -> dict[str, Any] | None:
    """Depth-first search for the first non-empty ``yaml``/``toml`` block."""
    if isinstance(node, Frontmatter):
        return parse_frontmatter_text(node.value, node.type, source=source)
    for child in children_of(node) or ():
        data = extract_inline_frontmatter(child, source=source)
        if data is not None:
            return data
    return None


def merge_frontmatter(
    inline: dict[str, Any] | None,
    sidecar: dict[str, Any] | None,
) -> FrontMatter:
    """Shallow-merge sidecar keys over inline keys into one record.

    Never raises: values of an unexpected shape are kept in their raw form
    or dropped, see :class:`FrontMatter`.
    """
    if inline is None and sidecar is None:
        return FrontMatter()
    return FrontMatter.model_validate({**(inline or {}), **(sidecar or {})})
