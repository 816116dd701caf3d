"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``. Provides lazy Toolkit initialization and centralized
result emission (stdout/stderr routing, runner annotations, exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from setup_kced.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from setup_kced.config.settings import SetupSettings
    from setup_kced.infrastructure.toolkit import Toolkit
    from setup_kced.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The toolkit is created on first use so ``--help`` and ``--version``
    never touch the environment's tool cache or temp directory.
    """

    def __init__(self, settings: SetupSettings) -> None:
        self.settings = settings
        self._toolkit: Toolkit | None = None

        from setup_kced.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def toolkit(self) -> Toolkit:
        """The toolkit instance (created lazily on first access)."""
        if self._toolkit is None:
            from setup_kced.infrastructure.runner import Runner
            from setup_kced.infrastructure.toolkit import Toolkit

            machine_output = self.settings.json_output or self.settings.quiet
            self._toolkit = Toolkit(self.settings, runner=Runner(err=machine_output))
        return self._toolkit

    def close(self) -> None:
        """Release the toolkit's scratch space, if a toolkit was created."""
        if self._toolkit is not None:
            self._toolkit.close()

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: writes to stdout, returns normally. Warnings go to stderr.
        * Failure: annotates the step as failed, writes to stderr, exits 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return

        message = result.error.message if result.error else f"{result.op} failed"
        self.toolkit.runner.set_failed(message)
        click.echo(output, err=True)
        raise SystemExit(1)
