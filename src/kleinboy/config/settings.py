"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``KLEINBOY_*`` prefix (``__`` for nested sections)
  3. TOML file    — ``kleinboy.toml`` discovered via walk-up
  4. Code defaults — baked into :mod:`kleinboy.config.models`
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from kleinboy.config.discovery import resolve_config, resolve_site_root
from kleinboy.config.models import DescriptionConfig, PathsConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a discovered ``kleinboy.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for the TOML path during construction.
_tls = threading.local()


class KleinboySettings(BaseSettings):
    """Settings for one kleinboy invocation.

    Frozen after construction and stored on the CLI's ``AppContext``.
    Use :meth:`with_debug` to derive the settings of a ``build --debug``
    run.

    Attributes:
        site_root: Directory the ``[paths]`` entries are relative to.
        config_path: The kleinboy.toml in effect, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "KLEINBOY_",
        "env_nested_delimiter": "__",
    }

    site_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- Collection toggles ---
    untitled: str = "(Untitled)"
    dump_article_metadata: bool = True
    dump_article_ast: bool = False
    dump_article_html: bool = False
    dump_tag_metadata: bool = True

    # --- TOML sections ---
    paths: PathsConfig = Field(default_factory=PathsConfig)
    description: DescriptionConfig = Field(default_factory=DescriptionConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert the TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        site_root: Path | None = None,
        **cli_flags: Any,
    ) -> KleinboySettings:
        """Construct settings from a CLI invocation.

        Discovers ``kleinboy.toml`` (from *site_root* when given, else the
        working directory) unless *config_path* names one explicitly.
        """
        toml_path = resolve_config(config_path, site_root)
        resolved_root = resolve_site_root(toml_path, site_root)

        _tls.toml_path = toml_path
        try:
            return cls(
                site_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None

    def with_debug(self) -> KleinboySettings:
        """Copy of these settings with AST and HTML dumps enabled."""
        return self.model_copy(update={"dump_article_ast": True, "dump_article_html": True})

    @property
    def articles_dir(self) -> Path:
        return self.site_root / self.paths.articles

    @property
    def tags_dir(self) -> Path:
        return self.site_root / self.paths.tags

    @property
    def generated_dir(self) -> Path:
        return self.site_root / self.paths.generated
