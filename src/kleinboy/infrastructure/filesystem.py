"""Filesystem operations for the site tree.

Discovery, logical-path derivation, and sidecar probing are synchronous
helpers; the ``*_async`` primitives wrap blocking I/O with
:func:`asyncio.to_thread` so the collection loop only suspends at I/O
boundaries.
"""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath

from kleinboy.domain.frontmatter import FrontmatterFormat

MARKDOWN_SUFFIX = ".md"

# Lookup order is the tie-break when several sidecars exist.
SIDECAR_SUFFIXES: tuple[tuple[str, FrontmatterFormat], ...] = (
    (".blog.json", "json"),
    (".blog.yml", "yaml"),
    (".blog.yaml", "yaml"),
    (".blog.toml", "toml"),
)


# ---------------------------------------------------------------------------
# Discovery and path resolution
# ---------------------------------------------------------------------------


def find_markdown_files(root: Path) -> list[Path]:
    """Recursively list ``*.md`` files under *root*, sorted.

    Hidden files and anything under a hidden directory are skipped.
    """
    results: list[Path] = []
    for path in root.rglob(f"*{MARKDOWN_SUFFIX}"):
        rel = path.relative_to(root)
        if any(part.startswith(".") for part in rel.parts):
            continue
        if path.is_file():
            results.append(path)
    return sorted(results)


def logical_path(markdown_path: Path, root: Path) -> str:
    """Site path of a markdown file: relative to *root*, extension stripped."""
    rel = PurePosixPath(markdown_path.relative_to(root).as_posix())
    return str(rel.with_suffix("")) if rel.suffix == MARKDOWN_SUFFIX else str(rel)


def display_path(path: Path, site_root: Path) -> str:
    """POSIX path relative to the site root when possible."""
    try:
        return path.relative_to(site_root).as_posix()
    except ValueError:
        return path.as_posix()


def sidecar_candidates(markdown_path: Path) -> list[tuple[Path, FrontmatterFormat]]:
    """Sidecar paths for *markdown_path* in lookup order."""
    stem = markdown_path.name.removesuffix(MARKDOWN_SUFFIX)
    return [(markdown_path.with_name(stem + suffix), fmt) for suffix, fmt in SIDECAR_SUFFIXES]


def resolve_under(base: Path, relative: str, suffix: str) -> Path | None:
    """Join ``relative + suffix`` under *base*; None if it escapes *base*."""
    candidate = base / f"{relative}{suffix}"
    if not candidate.resolve().is_relative_to(base.resolve()):
        return None
    return candidate


# ---------------------------------------------------------------------------
# File I/O
# ---------------------------------------------------------------------------


def write_text(path: Path, text: str) -> None:
    """Write *text* to *path*, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


async def read_text_async(path: Path) -> str:
    return await asyncio.to_thread(path.read_text, encoding="utf-8")


async def is_file_async(path: Path) -> bool:
    return await asyncio.to_thread(path.is_file)


async def is_dir_async(path: Path) -> bool:
    return await asyncio.to_thread(path.is_dir)


async def write_text_async(path: Path, text: str) -> None:
    await asyncio.to_thread(write_text, path, text)
