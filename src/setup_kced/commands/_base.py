"""Click command class with an ``--examples`` flag.

``SetupCommand(examples=...)`` adds an eager ``--examples`` option that prints
the given invocations and exits before any settings or toolkit work happens.
"""

from __future__ import annotations

from typing import Any

import click


class SetupCommand(click.Command):
    """Command that can print usage examples with ``--examples``."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value:
            click.echo(f"Examples for '{ctx.command_path}':\n")
            click.echo(self.examples)
            ctx.exit(0)
