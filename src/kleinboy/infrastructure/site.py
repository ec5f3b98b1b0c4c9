"""Site — the single dependency injected into every service.

Bundles the frozen settings with the run's collaborators: the markdown
pipeline (one parser per run) and the debug dump writer.  A Site lives
for exactly one invocation; nothing on it outlives the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from kleinboy.infrastructure.dumps import DumpWriter
from kleinboy.infrastructure.filesystem import display_path
from kleinboy.infrastructure.markdown import MarkdownPipeline

if TYPE_CHECKING:
    from kleinboy.config.settings import KleinboySettings

ARTICLES_JSON = "articles.json"
TAGS_JSON = "tags.json"


class Site:
    """The site tree on disk plus per-run collaborators."""

    def __init__(self, settings: KleinboySettings) -> None:
        self.settings = settings
        self.markdown = MarkdownPipeline()
        self.dumps = DumpWriter()

    @property
    def root(self) -> Path:
        return self.settings.site_root

    @property
    def articles_dir(self) -> Path:
        return self.settings.articles_dir

    @property
    def tags_dir(self) -> Path:
        return self.settings.tags_dir

    @property
    def generated_dir(self) -> Path:
        return self.settings.generated_dir

    @property
    def articles_json(self) -> Path:
        return self.generated_dir / ARTICLES_JSON

    @property
    def tags_json(self) -> Path:
        return self.generated_dir / TAGS_JSON

    def ast_dump_path(self, article_path: str) -> Path:
        return self.generated_dir / "ast" / f"{article_path}.json"

    def html_dump_path(self, article_path: str) -> Path:
        return self.generated_dir / "html" / f"{article_path}.html"

    def relative(self, path: Path) -> str:
        """*path* as a POSIX string relative to the site root."""
        return display_path(path, self.root)
