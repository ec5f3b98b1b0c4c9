"""Config file discovery and site-root resolution.

kleinboy.toml marks the site root the same way .git marks a repository:
the finder walks up from the working directory.  KLEINBOY_CONFIG and the
--config flag short-circuit the walk.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "kleinboy.toml"
CONFIG_ENV_VAR = "KLEINBOY_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest kleinboy.toml at or above *start* (default: cwd).

    When KLEINBOY_CONFIG is set it wins outright; a dangling value yields
    None rather than falling back to the walk.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    current = (start or Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_config(config_path: str | None, start: Path | None = None) -> Path | None:
    """Pick the config file for a run: explicit path if it exists, else discovery."""
    if config_path:
        p = Path(config_path)
        return p if p.is_file() else None
    return find_config(start)


def resolve_site_root(toml_path: Path | None, site_root: Path | None = None) -> Path:
    """The site root: explicit override, else the config's directory, else cwd."""
    if site_root is not None:
        return site_root
    if toml_path is not None:
        return toml_path.parent
    return Path.cwd()
