"""Opening the copy source and sink.

An empty or missing path selects the process's standard stream. Standard
streams are yielded as-is and never closed; files opened here are closed
when the context exits, on success and on error alike.

INVARIANT: an existing sink is never overwritten. Sinks are created with
exclusive mode (``"xb"``), so the existence check and the creation are one
atomic step.
"""

from __future__ import annotations

import sys
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO

from blkcopy.domain.errors import SinkConflict, SinkUnavailable, SourceUnavailable


def describe(path: Path | None, *, stdio: str) -> str:
    """Human label for a source or sink (``<stdin>``/``<stdout>`` for stdio)."""
    return str(path) if path else f"<{stdio}>"


@contextmanager
def open_source(path: Path | None, *, stdin: BinaryIO | None = None) -> Generator[BinaryIO]:
    """Yield a binary reader for *path*, or for standard input when *path* is None.

    Raises:
        SourceUnavailable: *path* cannot be opened for reading.
    """
    if not path:
        yield stdin if stdin is not None else sys.stdin.buffer
        return

    try:
        handle = path.open("rb")
    except OSError as exc:
        msg = f"cannot open source {path}: {exc.strerror or exc}"
        raise SourceUnavailable(msg) from exc
    with handle:
        yield handle


@contextmanager
def open_sink(path: Path | None, *, stdout: BinaryIO | None = None) -> Generator[BinaryIO]:
    """Yield a binary writer for a new file at *path*, or for standard output.

    Raises:
        SinkConflict: *path* already exists.
        SinkUnavailable: *path* cannot be created for another reason.
    """
    if not path:
        yield stdout if stdout is not None else sys.stdout.buffer
        return

    try:
        handle = path.open("xb")
    except FileExistsError as exc:
        msg = f"sink {path} already exists"
        raise SinkConflict(msg) from exc
    except OSError as exc:
        msg = f"cannot create sink {path}: {exc.strerror or exc}"
        raise SinkUnavailable(msg) from exc
    with handle:
        yield handle
