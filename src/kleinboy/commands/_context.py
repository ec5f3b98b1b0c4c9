"""AppContext — shared Click context for all commands.

Created once by the root CLI group and handed to subcommands via
``@click.pass_obj``.  Builds the run's Site on demand and centralizes
result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, TypeVar

import click

from kleinboy.config.logging import configure_logging
from kleinboy.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from collections.abc import Coroutine
    from typing import Any

    from kleinboy.config.settings import KleinboySettings
    from kleinboy.infrastructure.site import Site
    from kleinboy.services.result import ServiceResult

_T = TypeVar("_T")


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The Site is created only when a command needs one, so ``--help`` and
    ``--version`` never touch the site tree.
    """

    def __init__(self, settings: KleinboySettings) -> None:
        self.settings = settings
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def site(self, *, debug: bool = False) -> Site:
        """A fresh Site for one run; *debug* turns on AST and HTML dumps."""
        from kleinboy.infrastructure.site import Site

        settings = self.settings.with_debug() if debug else self.settings
        return Site(settings)

    @staticmethod
    def run(coro: Coroutine[Any, Any, _T]) -> _T:
        """Drive a service coroutine to completion on a new event loop."""
        return asyncio.run(coro)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if settings.quiet:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
