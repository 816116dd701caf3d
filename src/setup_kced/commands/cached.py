"""Command: list kced builds in the tool cache."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from setup_kced.commands._base import SetupCommand

if TYPE_CHECKING:
    from setup_kced.commands._context import AppContext


@click.command(cls=SetupCommand)
@click.pass_obj
def cached(app: AppContext) -> None:
    """List cached kced builds."""
    from setup_kced.services.install import InstallService

    app.emit(InstallService(app.toolkit).list_cached())
