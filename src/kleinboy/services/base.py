"""BaseService — shared foundation for kleinboy services.

Every service receives the run's :class:`Site` at construction time and
reads settings, directories, and collaborators from it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kleinboy.config.settings import KleinboySettings
    from kleinboy.infrastructure.site import Site


class BaseService:
    """Base for service-layer classes.

    Usage::

        class RegistryService(BaseService):
            async def build_article_registry(self) -> ArticleRegistry:
                root = self._site.articles_dir
                ...
    """

    def __init__(self, site: Site) -> None:
        self._site = site

    @property
    def _settings(self) -> KleinboySettings:
        return self._site.settings
