"""ArticleCollector — one markdown file in, one ArticleMetadata out.

Steps: read → parse → resolve frontmatter → extract fields → optional
debug dumps.  Field precedence:

- ``title``: ``x-kleinboy.title`` > first heading > configured ``untitled``
- ``description``: ``x-kleinboy.description`` > extracted summary
- ``images``: ``x-kleinboy.images`` > images found in the document
- ``tags``: top-level ``tags``, verbatim
- ``published_time`` / ``modified_time``: namespace field > ``date``

INVARIANT: Debug dumps are best-effort; they never abort collection.
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from kleinboy.domain.articles import SOURCE_TYPE_MARKDOWN, ArticleMetadata
from kleinboy.domain.ast import node_to_dict
from kleinboy.domain.extract import extract_description, extract_images, extract_title
from kleinboy.infrastructure.filesystem import read_text_async
from kleinboy.infrastructure.markdown import ParsedDocument
from kleinboy.services.base import BaseService
from kleinboy.services.frontmatter import FrontmatterResolver

log = structlog.get_logger(__name__)


class ArticleCollector(BaseService):
    """Collect article metadata from markdown files of the site."""

    async def collect(self, source_path: Path, article_path: str) -> ArticleMetadata:
        """Build the :class:`ArticleMetadata` of *source_path*.

        Args:
            source_path: Markdown file on disk.
            article_path: Logical site path (the registry key).

        Raises:
            FrontmatterError: Inline or sidecar frontmatter is malformed.
        """
        settings = self._settings
        text = await read_text_async(source_path)
        document = self._site.markdown.parse(text)
        root = document.root

        frontmatter = await FrontmatterResolver(self._site).resolve(source_path, root)
        ns = frontmatter.namespace

        title = ns.title
        if title is None:
            title = extract_title(root)
        if title is None:
            title = settings.untitled

        description = ns.description
        if description is None:
            description = extract_description(
                root,
                max_length=settings.description.max_length,
                ellipsis=settings.description.ellipsis,
            )

        images = ns.images if ns.images is not None else extract_images(root)

        article = ArticleMetadata(
            path=article_path,
            source_type=SOURCE_TYPE_MARKDOWN,
            source_path=self._site.relative(source_path),
            title=title,
            description=description,
            tags=frontmatter.tags,
            images=images,
            status=ns.status,
            published_time=frontmatter.published_time,
            modified_time=frontmatter.modified_time,
        )
        log.debug("article.collected", path=article_path, title=title, tags=article.tags)

        if settings.dump_article_ast:
            self._dump_ast(article_path, document)
        if settings.dump_article_html:
            self._dump_html(article_path, document)
        return article

    def _dump_ast(self, article_path: str, document: ParsedDocument) -> None:
        payload = json.dumps(node_to_dict(document.root), ensure_ascii=False)
        self._site.dumps.schedule(self._site.ast_dump_path(article_path), payload)

    def _dump_html(self, article_path: str, document: ParsedDocument) -> None:
        try:
            html = self._site.markdown.render_html(document)
        except Exception as exc:
            self._site.dumps.record_failure(
                self._site.html_dump_path(article_path), f"HTML render failed: {exc}"
            )
            return
        self._site.dumps.schedule(self._site.html_dump_path(article_path), html)
