"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Configures logging and telemetry, and centralizes
result emission (stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blkcopy.output.formatters import format_result

if TYPE_CHECKING:
    from blkcopy.config.settings import BlkcopySettings
    from blkcopy.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: BlkcopySettings) -> None:
        self.settings = settings

        from blkcopy.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from blkcopy.services.telemetry import enable_telemetry

            enable_telemetry()

    def emit(self, result: ServiceResult) -> None:
        """Report a ServiceResult on stderr with correct exit semantics.

        stdout is reserved for copied data, so nothing is written there.

        * Success: a summary is written only with ``--verbose`` or ``--json``
          (and never with ``--quiet``).
        * Failure: always written, then exits with code 1.
        """
        json_output = self.settings.json_output
        if result.ok:
            if self.settings.quiet or not (self.settings.verbose or json_output):
                return
            click.echo(format_result(result, json_output=json_output), err=True)
            if not json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
            return

        click.echo(format_result(result, json_output=json_output), err=True)
        raise SystemExit(1)
