"""Command: collect articles and tags into generated/*.json."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kleinboy.commands._base import KbCommand

if TYPE_CHECKING:
    from kleinboy.commands._context import AppContext


@click.command(
    cls=KbCommand,
    examples="""\
  kleinboy build
  kleinboy build --debug
  kleinboy --json build
  kleinboy -v build""",
)
@click.option(
    "-d",
    "--debug",
    is_flag=True,
    help="Also dump each article's AST and HTML under generated/.",
)
@click.pass_obj
def build(app: AppContext, debug: bool) -> None:
    """Collect article and tag metadata from the site tree."""
    from kleinboy.services.build import BuildService

    app.emit(app.run(BuildService(app.site(debug=debug)).build()))
