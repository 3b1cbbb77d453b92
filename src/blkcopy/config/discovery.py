"""Locating blkcopy.toml.

Lookup order: an explicit ``--config`` path, then ``BLKCOPY_CONFIG``, then
the nearest ``blkcopy.toml`` in the working directory or any parent.
"""

from __future__ import annotations

import os
from pathlib import Path

import click

CONFIG_FILENAME = "blkcopy.toml"
CONFIG_ENV_VAR = "BLKCOPY_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest blkcopy.toml at or above *start* (default: cwd).

    A set ``BLKCOPY_CONFIG`` wins over the walk; if it names no file, there
    is no config at all.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        return p if p.is_file() else None

    directory = (start or Path.cwd()).resolve()
    for candidate in (directory, *directory.parents):
        path = candidate / CONFIG_FILENAME
        if path.is_file():
            return path
    return None


def resolve_config(explicit: str | Path | None, start: Path | None = None) -> Path | None:
    """Pick the config file for this invocation.

    Raises:
        click.ClickException: *explicit* was given but is not a file.
    """
    if not explicit:
        return find_config(start)
    path = Path(explicit)
    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise click.ClickException(msg)
    return path
