"""BuildService — the default run: collect everything, write the artifacts.

Artifacts (each toggled by settings):

- ``generated/articles.json`` — the ArticleRegistry
- ``generated/tags.json`` — the TagRegistry
- ``generated/ast/<path>.json`` / ``generated/html/<path>.html`` — debug
  dumps written in the background by the collector

Registry artifacts are written only after collection succeeded, so a
fatal error leaves no partial output behind.
"""

from __future__ import annotations

import structlog

from kleinboy.config.logging import bind_run_context
from kleinboy.domain.articles import dump_registry
from kleinboy.domain.errors import ArticlesRootMissingError, FrontmatterError
from kleinboy.infrastructure.filesystem import write_text_async
from kleinboy.services.base import BaseService
from kleinboy.services.registry import RegistryService
from kleinboy.services.result import ServiceResult

log = structlog.get_logger(__name__)

OP = "build"


class BuildService(BaseService):
    """Run the collection pipeline once and persist its results."""

    async def build(self) -> ServiceResult:
        with bind_run_context(site=str(self._site.root), op=OP):
            return await self._build()

    async def _build(self) -> ServiceResult:
        settings = self._settings
        registries = RegistryService(self._site)
        try:
            articles = await registries.build_article_registry()
            tags = await registries.build_tag_registry(articles)
        except ArticlesRootMissingError as exc:
            await self._site.dumps.join()
            return ServiceResult.failure(
                OP,
                "ARTICLES_ROOT_MISSING",
                str(exc),
                path=self._site.relative(exc.root),
            )
        except FrontmatterError as exc:
            await self._site.dumps.join()
            return ServiceResult.failure(
                OP,
                "INVALID_FRONTMATTER",
                str(exc),
                source=exc.source,
                format=exc.format,
            )

        warnings = [
            f"Debug dump failed for {self._site.relative(failure.path)}: {failure.error}"
            for failure in await self._site.dumps.join()
        ]

        written: list[str] = []
        if settings.dump_article_metadata:
            await write_text_async(self._site.articles_json, dump_registry(articles))
            written.append(self._site.relative(self._site.articles_json))
        if settings.dump_tag_metadata:
            await write_text_async(self._site.tags_json, dump_registry(tags))
            written.append(self._site.relative(self._site.tags_json))

        log.info("build.complete", articles=len(articles.articles), tags=len(tags.tags))
        return ServiceResult(
            ok=True,
            op=OP,
            data={
                "article_count": len(articles.articles),
                "tag_count": len(tags.tags),
                "outputs": written,
                "ordered_articles": [index.path for index in articles.ordered_articles],
            },
            warnings=warnings,
        )
