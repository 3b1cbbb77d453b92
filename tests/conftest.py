"""Shared pytest fixtures and test helpers for blkcopy tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from blkcopy.services.telemetry import disable_telemetry


class ScriptedReader:
    """Upstream double that returns a planned sequence of chunks.

    Each planned chunk is handed out in pieces no larger than the requested
    size. ``None`` entries are returned as-is to mimic a non-blocking source
    with no data ready. After the plan runs out every read returns ``b""``.
    """

    def __init__(self, chunks: Iterable[bytes | None]) -> None:
        self._chunks: list[bytes | None] = list(chunks)
        self.calls = 0

    def read(self, size: int = -1, /) -> bytes | None:
        self.calls += 1
        if not self._chunks:
            return b""
        head = self._chunks[0]
        if head is None:
            self._chunks.pop(0)
            return None
        if size < 0 or size >= len(head):
            self._chunks.pop(0)
            return head
        self._chunks[0] = head[size:]
        return head[:size]


class FailingReader:
    """Upstream double whose reads always raise ``OSError``."""

    def read(self, size: int = -1, /) -> bytes:
        raise OSError(5, "Input/output error")


def drain_reader(reader: object, size: int) -> bytes:
    """Read *reader* to end-of-stream using reads of *size* bytes."""
    out = bytearray()
    while chunk := reader.read(size):  # type: ignore[attr-defined]
        out += chunk
    return bytes(out)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def scripted() -> Callable[[Iterable[bytes | None]], ScriptedReader]:
    """Factory for :class:`ScriptedReader` upstreams."""
    return ScriptedReader


@pytest.fixture
def failing_reader() -> FailingReader:
    return FailingReader()


@pytest.fixture
def drain() -> Callable[[object, int], bytes]:
    """Read a reader to end-of-stream with a fixed request size."""
    return drain_reader


@pytest.fixture
def source_file(tmp_path: Path) -> Callable[[bytes], Path]:
    """Write bytes to a fresh file under tmp_path and return its path."""
    counter: Iterator[int] = iter(range(1_000_000))

    def _make(data: bytes) -> Path:
        path = tmp_path / f"source-{next(counter)}.bin"
        path.write_bytes(data)
        return path

    return _make


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no inherited BLKCOPY_* config."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("BLKCOPY_CONFIG", raising=False)
    for name in ("BLKCOPY_VERBOSE", "BLKCOPY_QUIET", "BLKCOPY_JSON_OUTPUT", "BLKCOPY_LOG_JSON"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def _reset_process_state() -> Iterator[None]:
    """Undo logging and telemetry set up by CLI invocations."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    logging.getLogger("blkcopy").setLevel(logging.NOTSET)
    disable_telemetry()
