"""ImageReportService — list every image referenced by collected articles.

A pure consumer of ``generated/articles.json``: run ``kleinboy build``
first.  Image URLs are resolved against the article's directory, so
``posts/hello`` referencing ``img/a.png`` reports ``posts/img/a.png``.
"""

from __future__ import annotations

import posixpath

from pydantic import ValidationError

from kleinboy.domain.articles import ArticleRegistry
from kleinboy.infrastructure.filesystem import is_file_async, read_text_async
from kleinboy.services.base import BaseService
from kleinboy.services.result import ServiceResult

OP = "list_images"


def resolve_image_path(article_path: str, image: str) -> str:
    """Join *image* onto the directory of *article_path* and normalize.

    A leading slash on *image* does not make it absolute: ``/img/a.png`` in
    ``posts/hello`` resolves to ``posts/img/a.png``.
    """
    base = posixpath.dirname(article_path)
    return posixpath.normpath(posixpath.join(base, image.lstrip("/")))


class ImageReportService(BaseService):
    """Read the article registry artifact and report image paths."""

    async def list_images(self) -> ServiceResult:
        source = self._site.articles_json
        rel = self._site.relative(source)
        if not await is_file_async(source):
            return ServiceResult.failure(
                OP,
                "ARTICLES_JSON_MISSING",
                f"{rel} not found; run 'kleinboy build' first",
                path=rel,
            )

        raw = await read_text_async(source)
        try:
            registry = ArticleRegistry.model_validate_json(raw)
        except ValidationError as exc:
            return ServiceResult.failure(
                OP,
                "ARTICLES_JSON_INVALID",
                f"Cannot read {rel}: {exc.error_count()} validation error(s)",
                path=rel,
            )

        images = [
            resolve_image_path(article.path, image)
            for article in registry.articles.values()
            for image in article.images or ()
        ]
        return ServiceResult(ok=True, op=OP, data={"images": images, "count": len(images)})
