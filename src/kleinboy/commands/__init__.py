"""Subcommand modules for kleinboy.

Provides register_commands() which uses deferred imports to keep
``kleinboy --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register the standalone commands on the root CLI group."""
    from kleinboy.commands.build import build
    from kleinboy.commands.images import images

    cli.add_command(build)
    cli.add_command(images)
