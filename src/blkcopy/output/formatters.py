"""Human and JSON renderings of ServiceResult.

Failure messages always name the phase that failed, so a user can tell a
bad flag from an unreadable source or an existing sink.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from blkcopy.output.console import create_console, get_output

if TYPE_CHECKING:
    from blkcopy.services.result import ServiceResult

PHASE_LABELS: dict[str, str] = {
    "flags": "flag parsing",
    "reader": "reader construction",
    "writer": "writer construction",
    "copy": "copy",
}


def _format_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return _json.dumps(value, separators=(",", ":"))
    return str(value)


def _print_timings(console: Console, tree: dict[str, Any]) -> None:
    console.print(f"  [blk.key]timing[/]: {tree['duration_ms']:.2f} ms", soft_wrap=True)
    for child in tree.get("children", []):
        console.print(
            f"    [blk.phase]{child['name']}[/]: {child['duration_ms']:.2f} ms", soft_wrap=True
        )


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    no_color: bool = True,
) -> str:
    """Format a ServiceResult for display.

    Args:
        result: The service result to format.
        json_output: If True, return JSON; otherwise return human-readable text.
        no_color: Strip ANSI styling from the human rendering.
    """
    if json_output:
        return result.model_dump_json(indent=2)

    console = create_console(no_color=no_color)
    if result.ok:
        console.print(f"[blk.ok]OK[/]: [blk.op]{result.op}[/]", soft_wrap=True)
        for key, value in result.data.items():
            console.print(f"  [blk.key]{key}[/]: {escape(_format_value(value))}", soft_wrap=True)
    else:
        message = result.error.message if result.error else "Unknown error"
        phase = result.error.phase if result.error else None
        label = PHASE_LABELS.get(phase, phase) if phase else None
        where = f" during [blk.phase]{label}[/]" if label else ""
        console.print(
            f"[blk.error]ERROR[/]: [blk.op]{result.op}[/] failed{where}: {escape(message)}",
            soft_wrap=True,
        )
    telemetry = (result.meta or {}).get("telemetry")
    if telemetry:
        _print_timings(console, telemetry)
    return get_output(console).rstrip("\n")


def format_transforms(descriptions: dict[str, str], *, no_color: bool = True) -> str:
    """Render the available transforms as a two-column table."""
    console = create_console(no_color=no_color)
    table = Table(show_header=True, header_style="blk.key", box=None, pad_edge=False)
    table.add_column("name", style="blk.name", no_wrap=True)
    table.add_column("description")
    for name, description in descriptions.items():
        table.add_row(name, description)
    console.print(table)
    return get_output(console).rstrip("\n")
