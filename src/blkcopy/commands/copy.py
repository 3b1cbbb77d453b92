"""Command: copy a byte window from a source to a sink."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from blkcopy.commands._base import BlkCommand

if TYPE_CHECKING:
    from blkcopy.commands._context import AppContext


@click.command(
    cls=BlkCommand,
    examples="""\
  blkcopy copy --from in.bin --to out.bin
  blkcopy copy --from big.log --offset 4096 --limit 1024
  cat notes.txt | blkcopy copy --conv upper_case
  blkcopy copy --from draft.txt --to clean.txt --conv trim_spaces,lower_case
  blkcopy --json copy --from in.bin --to out.bin --block-size 65536""",
)
@click.option(
    "--from",
    "source",
    default=None,
    type=click.Path(dir_okay=False),
    help="File to read. Default: stdin.",
)
@click.option(
    "--to",
    "sink",
    default=None,
    type=click.Path(dir_okay=False),
    help="File to create (must not exist). Default: stdout.",
)
@click.option(
    "--offset",
    type=click.IntRange(min=0),
    default=0,
    show_default=True,
    help="Bytes to skip at the start of the source.",
)
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=None,
    help="Maximum bytes to read after the offset. Default: unlimited.",
)
@click.option(
    "--block-size",
    type=click.IntRange(min=1),
    default=None,
    help="Bytes per read and write. Default: 1024.",
)
@click.option(
    "--conv",
    default=None,
    help="Comma-separated transforms: lower_case, upper_case, trim_spaces.",
)
@click.pass_obj
def copy(
    app: AppContext,
    source: str | None,
    sink: str | None,
    offset: int,
    limit: int | None,
    block_size: int | None,
    conv: str | None,
) -> None:
    """Copy bytes from a source to a sink, optionally transforming text."""
    from blkcopy.config.models import CopyOptions
    from blkcopy.domain.errors import ConfigError
    from blkcopy.services.copy import CopyService
    from blkcopy.services.result import ServiceResult

    defaults = app.settings.defaults
    try:
        options = CopyOptions.from_cli(
            source=source,
            sink=sink,
            skip=offset,
            limit=limit,
            block_size=block_size if block_size is not None else defaults.block_size,
            transforms=conv if conv is not None else defaults.transforms,
        )
    except ConfigError as exc:
        app.emit(ServiceResult.failure("copy", exc))
        return

    app.emit(CopyService(options).copy())
