"""Command: list image paths referenced by collected articles."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from kleinboy.commands._base import KbCommand

if TYPE_CHECKING:
    from kleinboy.commands._context import AppContext


@click.command(
    cls=KbCommand,
    examples="""\
  kleinboy images
  kleinboy images | sort -u
  kleinboy --json images""",
)
@click.pass_obj
def images(app: AppContext) -> None:
    """Print every image path referenced in generated/articles.json."""
    from kleinboy.services.images import ImageReportService

    result = app.run(ImageReportService(app.site()).list_images())
    if not result.ok or app.settings.json_output:
        app.emit(result)
        return

    # Pipe-friendly: one path per line, nothing else on stdout.
    for image in result.data["images"]:
        click.echo(image)
