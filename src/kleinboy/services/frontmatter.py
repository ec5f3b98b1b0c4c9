"""FrontmatterResolver — locate and merge inline and sidecar frontmatter.

Precedence (highest wins): sidecar file > inline block.  Only the first
sidecar in lookup order (``.blog.json``, ``.blog.yml``, ``.blog.yaml``,
``.blog.toml``) is honored.

Malformed frontmatter raises :class:`~kleinboy.domain.errors.FrontmatterError`
and propagates from here: one bad file aborts the run.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

from kleinboy.domain.frontmatter import (
    FrontMatter,
    extract_inline_frontmatter,
    merge_frontmatter,
    parse_frontmatter_text,
)
from kleinboy.infrastructure.filesystem import is_file_async, read_text_async, sidecar_candidates
from kleinboy.services.base import BaseService

if TYPE_CHECKING:
    from kleinboy.domain.ast import Node

log = structlog.get_logger(__name__)


class FrontmatterResolver(BaseService):
    """Produce one merged :class:`FrontMatter` per markdown file."""

    async def load_sidecar(self, markdown_path: Path) -> dict[str, Any] | None:
        """Parse the first existing sidecar beside *markdown_path*, if any."""
        for candidate, fmt in sidecar_candidates(markdown_path):
            if not await is_file_async(candidate):
                continue
            log.debug("sidecar.found", path=self._site.relative(candidate), format=fmt)
            text = await read_text_async(candidate)
            return parse_frontmatter_text(text, fmt, source=self._site.relative(candidate))
        return None

    async def resolve(self, markdown_path: Path, root: Node) -> FrontMatter:
        source = self._site.relative(markdown_path)
        inline = extract_inline_frontmatter(root, source=source)
        sidecar = await self.load_sidecar(markdown_path)
        return merge_frontmatter(inline, sidecar)
