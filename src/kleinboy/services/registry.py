"""RegistryService — build the article registry and the tag registry.

Articles are collected strictly one at a time, in sorted scan order.
Scan order fills the ``articles`` mapping; ``orderedArticles`` comes
solely from :func:`~kleinboy.domain.articles.order_articles`.
"""

from __future__ import annotations

import structlog

from kleinboy.domain.articles import (
    ArticleMetadata,
    ArticleRegistry,
    TagMetadata,
    TagRegistry,
    aggregate_tags,
    order_articles,
)
from kleinboy.domain.errors import ArticlesRootMissingError
from kleinboy.infrastructure.filesystem import (
    MARKDOWN_SUFFIX,
    find_markdown_files,
    is_dir_async,
    is_file_async,
    logical_path,
    resolve_under,
)
from kleinboy.services.base import BaseService
from kleinboy.services.collect import ArticleCollector

log = structlog.get_logger(__name__)


class RegistryService(BaseService):
    """Assemble the registries of one run."""

    async def build_article_registry(self) -> ArticleRegistry:
        """Collect every ``*.md`` under the articles root.

        Raises:
            ArticlesRootMissingError: The articles root does not exist.
            FrontmatterError: Any article has malformed frontmatter.
        """
        root = self._site.articles_dir
        if not await is_dir_async(root):
            raise ArticlesRootMissingError(root)

        collector = ArticleCollector(self._site)
        articles: dict[str, ArticleMetadata] = {}
        for markdown_path in find_markdown_files(root):
            article_path = logical_path(markdown_path, root)
            articles[article_path] = await collector.collect(markdown_path, article_path)

        ordered = order_articles(articles.values())
        log.info("articles.collected", count=len(articles))
        return ArticleRegistry(articles=articles, ordered_articles=ordered)

    async def build_tag_registry(self, registry: ArticleRegistry) -> TagRegistry:
        """Aggregate tags and attach dedicated tag pages (``tags/<key>.md``).

        Raises:
            FrontmatterError: A tag page has malformed frontmatter.
        """
        tag_to_articles = aggregate_tags(registry.articles)
        collector = ArticleCollector(self._site)
        tags_dir = self._site.tags_dir
        tags: dict[str, TagMetadata] = {}

        for key in tag_to_articles:
            page = resolve_under(tags_dir, key, MARKDOWN_SUFFIX)
            if page is None:
                log.warning("tag.page_outside_tags_dir", tag=key)
            if page is not None and await is_file_async(page):
                article_path = f"{self._site.settings.paths.tags}/{key}"
                article = await collector.collect(page, article_path)
                tags[key] = TagMetadata(key=key, title=article.title, article=article)
            else:
                tags[key] = TagMetadata(key=key, title=key)

        log.info("tags.collected", count=len(tags))
        return TagRegistry(tags=tags, tag_to_articles=tag_to_articles)
