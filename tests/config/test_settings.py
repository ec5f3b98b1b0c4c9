"""Tests for KleinboySettings — unified settings with TOML source."""

from pathlib import Path

import click
import pytest

from kleinboy.config.settings import KleinboySettings


class TestSettingsDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        """With no TOML and no env vars, all fields use code defaults."""
        settings = KleinboySettings.from_cli(site_root=tmp_path)
        assert settings.site_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.quiet is False
        assert settings.untitled == "(Untitled)"
        assert settings.dump_article_metadata is True
        assert settings.dump_article_ast is False
        assert settings.dump_article_html is False
        assert settings.dump_tag_metadata is True
        assert settings.description.max_length == 200
        assert settings.description.ellipsis == "..."

    def test_directories(self, tmp_path: Path) -> None:
        settings = KleinboySettings.from_cli(site_root=tmp_path)
        assert settings.articles_dir == tmp_path / "articles"
        assert settings.tags_dir == tmp_path / "tags"
        assert settings.generated_dir == tmp_path / "generated"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = KleinboySettings.from_cli(site_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]

    def test_with_debug(self, tmp_path: Path) -> None:
        settings = KleinboySettings.from_cli(site_root=tmp_path, untitled="x")
        debug = settings.with_debug()
        assert debug.dump_article_ast is True
        assert debug.dump_article_html is True
        assert debug.untitled == "x"
        assert settings.dump_article_ast is False


class TestTomlSource:
    def test_loads_from_toml(self, tmp_path: Path) -> None:
        (tmp_path / "kleinboy.toml").write_text(
            'untitled = "Nameless"\ndump_article_ast = true\n'
            '[paths]\narticles = "content"\n[description]\nmax_length = 80\n'
        )
        settings = KleinboySettings.from_cli(site_root=tmp_path)
        assert settings.untitled == "Nameless"
        assert settings.dump_article_ast is True
        assert settings.articles_dir == tmp_path / "content"
        assert settings.tags_dir == tmp_path / "tags"  # default preserved
        assert settings.description.max_length == 80
        assert settings.config_path == tmp_path / "kleinboy.toml"

    def test_empty_toml_uses_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "kleinboy.toml").write_text("")
        settings = KleinboySettings.from_cli(site_root=tmp_path)
        assert settings.untitled == "(Untitled)"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "site.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('untitled = "custom"\n')
        settings = KleinboySettings.from_cli(config_path=str(custom))
        assert settings.untitled == "custom"
        assert settings.config_path == custom
        assert settings.site_root == custom.parent

    def test_invalid_toml_is_a_click_error(self, tmp_path: Path) -> None:
        (tmp_path / "kleinboy.toml").write_text("untitled = \n")
        with pytest.raises(click.ClickException, match="Invalid TOML"):
            KleinboySettings.from_cli(site_root=tmp_path)

    def test_invalid_value_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "kleinboy.toml").write_text("[description]\nmax_length = 0\n")
        with pytest.raises(Exception):
            KleinboySettings.from_cli(site_root=tmp_path)


class TestPriorityChain:
    def test_env_overrides_toml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        (tmp_path / "kleinboy.toml").write_text('untitled = "from toml"\n')
        monkeypatch.setenv("KLEINBOY_UNTITLED", "from env")
        settings = KleinboySettings.from_cli(site_root=tmp_path)
        assert settings.untitled == "from env"

    def test_nested_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KLEINBOY_DESCRIPTION__MAX_LENGTH", "50")
        settings = KleinboySettings.from_cli(site_root=tmp_path)
        assert settings.description.max_length == 50

    def test_cli_overrides_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("KLEINBOY_QUIET", "false")
        settings = KleinboySettings.from_cli(site_root=tmp_path, quiet=True)
        assert settings.quiet is True
