"""Article and tag registries — models, ordering, and tag aggregation.

JSON field names match the published ``articles.json`` / ``tags.json``
format (``sourceType``, ``orderedArticles``, ``tagToArticles`` ...).  Dump
with :func:`dump_registry` so aliases are used and absent fields are
omitted.

INVARIANT: every entry of ``ArticleRegistry.ordered_articles`` has a
matching key in ``ArticleRegistry.articles``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import UTC, datetime

from pydantic import BaseModel, Field

SOURCE_TYPE_MARKDOWN = "markdown"

_REGISTRY_CONFIG = {"frozen": True, "populate_by_name": True}


class ArticleMetadata(BaseModel):
    """Canonical record for one article, keyed by its logical ``path``."""

    model_config = _REGISTRY_CONFIG

    path: str
    source_type: str | None = Field(default=None, alias="sourceType")
    source_path: str | None = Field(default=None, alias="sourcePath")
    title: str
    description: str | None = None
    tags: list[str] | None = None
    images: list[str] | None = None
    status: str | None = None
    published_time: str | None = None
    modified_time: str | None = None


class ArticleIndex(BaseModel):
    """The part of an article needed for ordering and tag links."""

    model_config = _REGISTRY_CONFIG

    path: str
    status: str | None = None
    published_time: str | None = None


class ArticleRegistry(BaseModel):
    model_config = _REGISTRY_CONFIG

    articles: dict[str, ArticleMetadata] = Field(default_factory=dict)
    ordered_articles: list[ArticleIndex] = Field(default_factory=list, alias="orderedArticles")


class TagMetadata(BaseModel):
    """A tag; ``article`` is set only when ``tags/<key>.md`` exists."""

    model_config = _REGISTRY_CONFIG

    key: str
    title: str
    article: ArticleMetadata | None = None


class TagRegistry(BaseModel):
    model_config = _REGISTRY_CONFIG

    tags: dict[str, TagMetadata] = Field(default_factory=dict)
    tag_to_articles: dict[str, dict[str, ArticleIndex]] = Field(
        default_factory=dict, alias="tagToArticles"
    )


def dump_registry(registry: ArticleRegistry | TagRegistry) -> str:
    """Serialize a registry to its published compact JSON form."""
    return registry.model_dump_json(by_alias=True, exclude_none=True)


def make_article_index(article: ArticleMetadata) -> ArticleIndex:
    return ArticleIndex(
        path=article.path,
        status=article.status,
        published_time=article.published_time,
    )


# ---------------------------------------------------------------------------
# Ordering
# ---------------------------------------------------------------------------


def parse_published_time(value: str) -> datetime | None:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC.

    Returns None when *value* is not ISO-8601.
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


_OLDEST = datetime.min.replace(tzinfo=UTC)


def order_articles(articles: Iterable[ArticleMetadata]) -> list[ArticleIndex]:
    """Project articles to indexes and sort them for the article list.

    Undated articles (drafts) come first, in descending path order.  Dated
    articles follow, most recent first; equal dates keep input order and
    unparseable dates sort as the oldest.
    """
    undated: list[ArticleIndex] = []
    dated: list[tuple[datetime, ArticleIndex]] = []
    for article in articles:
        index = make_article_index(article)
        if index.published_time is None:
            undated.append(index)
        else:
            dated.append((parse_published_time(index.published_time) or _OLDEST, index))

    undated.sort(key=lambda i: i.path, reverse=True)
    dated.sort(key=lambda pair: pair[0], reverse=True)
    return undated + [index for _, index in dated]


# ---------------------------------------------------------------------------
# Tag aggregation
# ---------------------------------------------------------------------------


def aggregate_tags(
    articles: Mapping[str, ArticleMetadata],
) -> dict[str, dict[str, ArticleIndex]]:
    """Map each tag to the indexes of the articles carrying it.

    Tags appear in first-seen order across *articles*.
    """
    tag_to_articles: dict[str, dict[str, ArticleIndex]] = {}
    for article in articles.values():
        for tag in article.tags or ():
            tag_to_articles.setdefault(tag, {})[article.path] = make_article_index(article)
    return tag_to_articles
