"""KbCommand — click Command with an on-demand ``--examples`` flag.

``--help`` stays short; usage examples live on the command and are printed
only when asked for.
"""

from __future__ import annotations

from typing import Any

import click


class KbCommand(click.Command):
    """Command that accepts ``examples=...`` and exposes them as ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(self._examples_option())

    def _examples_option(self) -> click.Option:
        return click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=self._print_examples,
            help="Show usage examples and exit.",
        )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
        ctx.exit(0)
