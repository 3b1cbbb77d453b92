"""BoundedWindow: the skip + limit region of a raw byte source.

The prefix is skipped by reading and discarding, never by seeking, so pipes
and standard input behave exactly like regular files.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, BinaryIO

from blkcopy.domain.errors import IncompleteSkip, SkipReadError, UpstreamReadError
from blkcopy.pipeline.base import MAX_STALLED_READS

if TYPE_CHECKING:
    from collections.abc import Buffer

logger = logging.getLogger(__name__)

# Size of each discard read while skipping the prefix.
SKIP_CHUNK_SIZE = 64 * 1024

UNLIMITED = sys.maxsize


class BoundedWindow:
    """Read-only view of *raw* that skips *skip* bytes and stops after *limit*.

    The skip happens eagerly in the constructor, so a short source fails
    before anything downstream is built.

    Raises:
        IncompleteSkip: *raw* ended before *skip* bytes were discarded.
        SkipReadError: *raw* failed or stalled while skipping.
        UpstreamReadError: *raw* raised an ``OSError`` (chained).
    """

    def __init__(self, raw: BinaryIO, *, skip: int = 0, limit: int = UNLIMITED) -> None:
        if skip < 0 or limit < 0:
            msg = f"skip and limit must be non-negative (skip={skip}, limit={limit})"
            raise ValueError(msg)
        self._raw = raw
        self._remaining = limit
        self._position = 0
        self._skip(skip)

    def _skip(self, count: int) -> None:
        skipped = 0
        stalls = 0
        while skipped < count:
            try:
                chunk = self._read_raw(min(SKIP_CHUNK_SIZE, count - skipped))
            except UpstreamReadError as exc:
                msg = f"skipping {count} bytes: {exc}"
                raise SkipReadError(msg) from exc.__cause__
            if chunk is None:
                stalls += 1
                if stalls > MAX_STALLED_READS:
                    msg = f"source made no progress after {MAX_STALLED_READS} reads (skipping)"
                    raise SkipReadError(msg)
                continue
            stalls = 0
            if not chunk:
                raise IncompleteSkip(count, skipped)
            skipped += len(chunk)
        if count:
            logger.debug("Skipped %d bytes", skipped)

    def _read_raw(self, size: int) -> bytes | None:
        try:
            return self._raw.read(size)
        except OSError as exc:
            msg = f"reading source failed: {exc}"
            raise UpstreamReadError(msg) from exc

    @property
    def position(self) -> int:
        """Bytes delivered so far, not counting the skipped prefix."""
        return self._position

    @property
    def remaining(self) -> int:
        """Bytes still allowed by the limit."""
        return self._remaining

    def read(self, size: int = -1, /) -> bytes | None:
        """Read up to *size* bytes of the window (all remaining if negative).

        Returns ``b""`` once the limit is reached, even if *raw* has more data.
        """
        if self._remaining == 0:
            return b""
        if size < 0:
            size = -1 if self._remaining == UNLIMITED else self._remaining
        elif size > self._remaining:
            size = self._remaining
        chunk = self._read_raw(size)
        if chunk:
            self._position += len(chunk)
            self._remaining -= len(chunk)
        return chunk

    def readinto(self, buffer: Buffer) -> int | None:
        """Read into *buffer*; ``None`` when a non-blocking source has no data yet."""
        with memoryview(buffer) as view, view.cast("B") as target:
            chunk = self.read(len(target))
            if chunk is None:
                return None
            target[: len(chunk)] = chunk
            return len(chunk)
