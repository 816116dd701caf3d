"""Command: resolve the version that install would use."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from setup_kced.commands._base import SetupCommand

if TYPE_CHECKING:
    from setup_kced.commands._context import AppContext


@click.command(
    cls=SetupCommand,
    examples="""\
  setup-kced resolve
  setup-kced resolve --kced-version 1.8.0-beta2
  setup-kced -q resolve""",
)
@click.option("--kced-version", default=None, help="Version to resolve.")
@click.pass_obj
def resolve(app: AppContext, kced_version: str | None) -> None:
    """Print the full version install would use, without downloading."""
    from setup_kced.services.install import InstallService

    app.emit(InstallService(app.toolkit).resolve_version(kced_version))
