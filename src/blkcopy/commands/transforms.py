"""Command: list the available transforms."""

from __future__ import annotations

import json

import click

from blkcopy.commands._base import BlkCommand
from blkcopy.commands._context import AppContext


@click.command(cls=BlkCommand, examples="  blkcopy transforms\n  blkcopy --json transforms")
@click.pass_obj
def transforms(app: AppContext) -> None:
    """List the transforms accepted by ``copy --conv``."""
    from blkcopy.domain.transforms import TRANSFORM_DESCRIPTIONS
    from blkcopy.output.formatters import format_transforms

    descriptions = {str(name): text for name, text in TRANSFORM_DESCRIPTIONS.items()}
    if app.settings.json_output:
        click.echo(json.dumps(descriptions, indent=2))
    else:
        click.echo(format_transforms(descriptions))
