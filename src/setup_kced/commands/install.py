"""Command: install kced and put it on PATH."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from setup_kced.commands._base import SetupCommand

if TYPE_CHECKING:
    from setup_kced.commands._context import AppContext


@click.command(
    cls=SetupCommand,
    examples="""\
  setup-kced install
  setup-kced install --kced-version 0.1.11
  setup-kced install --kced-version 1.7 --wrapper
  INPUT_KCED-VERSION=0.1.11 setup-kced --json install""",
)
@click.option(
    "--kced-version",
    default=None,
    help="Version to install (e.g. 0.1.11 or 1.7). Empty means the latest release.",
)
@click.option(
    "--wrapper/--no-wrapper",
    default=None,
    help="Capture the tool's stdout, stderr and exit code as step outputs.",
)
@click.pass_obj
def install(app: AppContext, kced_version: str | None, wrapper: bool | None) -> None:
    """Download (or reuse from cache) kced and add it to PATH."""
    from setup_kced.services.install import InstallService

    app.emit(InstallService(app.toolkit).install(kced_version, wrapper=wrapper))
