"""Subcommand modules for blkcopy.

register_commands() uses deferred imports so ``blkcopy --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from blkcopy.commands.copy import copy
    from blkcopy.commands.transforms import transforms

    cli.add_command(copy)
    cli.add_command(transforms)
