"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, kleinboy.toml only contains
overrides.  An empty (or missing) kleinboy.toml is a valid site.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- kleinboy.toml sections ---


class PathsConfig(BaseModel):
    """[paths] section — directories relative to the site root."""

    model_config = {"frozen": True}

    articles: str = "articles"
    tags: str = "tags"
    generated: str = "generated"


class DescriptionConfig(BaseModel):
    """[description] section."""

    model_config = {"frozen": True}

    max_length: int = Field(default=200, ge=1)
    ellipsis: str = "..."

