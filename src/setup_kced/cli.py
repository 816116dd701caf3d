"""Root CLI group for setup-kced with global flags and command registration."""

from __future__ import annotations

import click

from setup_kced import __version__
from setup_kced.commands import register_commands
from setup_kced.commands._context import AppContext
from setup_kced.config.settings import SetupSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="setup-kced")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("--token", default=None, help="API token for the releases listing.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    token: str | None,
    config_path: str | None,
) -> None:
    """setup-kced — install kced into the CI tool cache and onto PATH."""
    ctx.ensure_object(dict)
    settings = SetupSettings.from_cli(
        config_path=config_path,
        json_output=json_output or None,
        quiet=quiet or None,
        verbose=verbose or None,
        log_json=log_json or None,
        token=token,
    )
    ctx.obj = AppContext(settings)
    ctx.call_on_close(ctx.obj.close)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
