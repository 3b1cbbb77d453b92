"""Click base classes adding an ``--examples`` flag.

``--help`` stays short; ``--examples`` prints a few ready-to-paste
invocations and exits.
"""

from __future__ import annotations

import textwrap
from typing import Any

import click


class _ExamplesMixin:
    """Accept ``examples=`` and expose it through an eager ``--examples`` option."""

    params: list[click.Parameter]

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = textwrap.dedent(examples).strip("\n") if examples else None
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(textwrap.indent(self.examples or "", "  "))
        ctx.exit(0)


class BlkCommand(_ExamplesMixin, click.Command):
    """Command with ``--examples`` support."""


class BlkGroup(_ExamplesMixin, click.Group):
    """Group whose ``@group.command`` children are :class:`BlkCommand` by default."""

    command_class = BlkCommand
