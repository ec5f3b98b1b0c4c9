"""Shared pytest fixtures and test helpers for kleinboy tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from kleinboy.config.settings import KleinboySettings
from kleinboy.infrastructure.site import Site


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo handler swaps made by ``configure_logging`` (CLI runs included)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    kb = logging.getLogger("kleinboy")
    kb_level = kb.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    kb.setLevel(kb_level)


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's KLEINBOY_* environment out of the tests."""
    monkeypatch.delenv("KLEINBOY_CONFIG", raising=False)
    monkeypatch.delenv("KLEINBOY_UNTITLED", raising=False)


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Temporary site directory with an empty ``articles/`` tree.

    This is the single source of truth for the site layout; ``site`` and
    ``_isolated_site`` build on it.
    """
    (tmp_path / "articles").mkdir()
    return tmp_path


@pytest.fixture
def site(site_root: Path) -> Site:
    """A Site with default settings rooted at ``site_root``."""
    return make_site(site_root)


@pytest.fixture
def _isolated_site(site_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp site root so CLI runs operate on it.

    Use via ``@pytest.mark.usefixtures("_isolated_site")`` on command test
    classes.  Tests that need the path can request ``site_root`` as well.
    """
    monkeypatch.chdir(site_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_site(site_root: Path, **overrides: Any) -> Site:
    """Build a Site for *site_root* with settings *overrides* applied."""
    return Site(KleinboySettings.from_cli(site_root=site_root, **overrides))


def write_file(root: Path, relative: str, text: str) -> Path:
    """Write *text* to ``root / relative``, creating directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def write_article(site_root: Path, path: str, text: str) -> Path:
    """Write ``articles/<path>.md`` under *site_root*."""
    return write_file(site_root / "articles", f"{path}.md", text)
