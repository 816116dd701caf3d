"""Subcommand modules for setup-kced."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all commands on the root CLI group."""
    from setup_kced.commands.cached import cached
    from setup_kced.commands.install import install
    from setup_kced.commands.resolve import resolve

    cli.add_command(install)
    cli.add_command(resolve)
    cli.add_command(cached)
