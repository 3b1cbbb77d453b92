"""Root CLI group for blkcopy with global flags and command registration."""

from __future__ import annotations

import click

from blkcopy import __version__
from blkcopy.commands import register_commands
from blkcopy.commands._base import BlkGroup
from blkcopy.commands._context import AppContext
from blkcopy.config.settings import BlkcopySettings


@click.group(cls=BlkGroup, invoke_without_command=True)
@click.version_option(version=__version__, prog_name="blkcopy")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON result on stderr.")
@click.option("-q", "--quiet", is_flag=True, help="Suppress the result summary.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logging and a timed result summary.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
) -> None:
    """Copy byte windows between files and pipes, with streaming text transforms."""
    ctx.ensure_object(dict)
    # Only flags actually given override env vars and blkcopy.toml.
    flags = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    settings = BlkcopySettings.from_cli(
        config_path=config_path,
        **{name: value for name, value in flags.items() if value},
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
