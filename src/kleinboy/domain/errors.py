"""Domain exceptions raised by the collection pipeline.

Both are fatal for a run: services convert them into ``ServiceResult``
errors at the service boundary, so no partial artifacts get written.
"""

from __future__ import annotations

from pathlib import Path


class ArticlesRootMissingError(FileNotFoundError):
    """The configured articles directory does not exist."""

    def __init__(self, root: Path) -> None:
        super().__init__(f"Articles directory does not exist: {root}")
        self.root = root


class FrontmatterError(ValueError):
    """Inline or sidecar frontmatter is not a parseable mapping.

    Attributes:
        source: File the frontmatter came from.
        format: ``yaml``, ``toml`` or ``json``.
        reason: Parser message, or the type found instead of a mapping.
    """

    def __init__(self, source: str, reason: str, *, fmt: str) -> None:
        super().__init__(f"Invalid {fmt} frontmatter in {source}: {reason}")
        self.source = source
        self.format = fmt
        self.reason = reason
