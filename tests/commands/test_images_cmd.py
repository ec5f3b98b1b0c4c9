"""Tests for the ``kleinboy images`` command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from kleinboy.cli import cli
from tests.conftest import write_article


@pytest.mark.usefixtures("_isolated_site")
class TestImagesCommand:
    def _build(self, cli_runner: CliRunner, site_root: Path) -> None:
        write_article(site_root, "posts/hello", "# Hello\n\n![a](img/a.png)\n\n![b](../b.png)\n")
        write_article(site_root, "plain", "# Plain\n")
        assert cli_runner.invoke(cli, ["build"]).exit_code == 0

    def test_one_path_per_line(self, cli_runner: CliRunner, site_root: Path) -> None:
        self._build(cli_runner, site_root)
        result = cli_runner.invoke(cli, ["images"])
        assert result.exit_code == 0
        assert result.output.splitlines() == ["posts/img/a.png", "b.png"]

    def test_json(self, cli_runner: CliRunner, site_root: Path) -> None:
        self._build(cli_runner, site_root)
        result = cli_runner.invoke(cli, ["--json", "images"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["op"] == "list_images"
        assert data["data"]["count"] == 2

    def test_requires_build(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["images"])
        assert result.exit_code == 1
        assert "kleinboy build" in result.output
