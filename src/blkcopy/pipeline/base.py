"""StreamFilter: shared shape of every stage in the transformation chain.

A filter pulls raw bytes from its upstream on demand and hands transformed
bytes to its caller. Two buffers carry state between calls:

- the *carry* buffer holds raw bytes that may be the start of a UTF-8
  sequence split across upstream reads;
- the *pending* buffer holds transformed bytes that did not fit in the
  caller's last request.

INVARIANT: after every fill cycle the carry holds nothing but an incomplete
trailing sequence. Bytes in pending are final and only leave from the front.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from blkcopy.domain import utf8
from blkcopy.domain.errors import UpstreamReadError

if TYPE_CHECKING:
    from collections.abc import Buffer

logger = logging.getLogger(__name__)

# Consecutive ``None`` reads tolerated from a non-blocking upstream.
MAX_STALLED_READS = 64

# Chunk size used by ``read()`` with no size.
DEFAULT_READ_SIZE = 8192


@runtime_checkable
class ByteReader(Protocol):
    """Anything a filter can pull bytes from.

    ``read`` returns up to *size* bytes, ``b""`` at end-of-stream, or ``None``
    when a non-blocking source has nothing available yet.
    """

    def read(self, size: int = -1, /) -> bytes | None: ...


class StreamFilter(ABC):
    """Abstract base for stateful UTF-8 aware byte-stream filters.

    Subclasses implement :meth:`_transform`, which receives every run of
    complete decoded characters in stream order. At end-of-stream an
    incomplete sequence left in the carry is handed over undecoded, as
    escaped surrogates that encode back to the original bytes.

    Usage::

        class Shout(StreamFilter):
            def _transform(self, text: str) -> str:
                return text.upper()

        with open("in.txt", "rb") as fh:
            data = Shout(fh).read()
    """

    name: str = "filter"

    def __init__(self, upstream: ByteReader) -> None:
        self._upstream = upstream
        self._carry = bytearray()
        self._pending = bytearray()
        self._exhausted = False

    @abstractmethod
    def _transform(self, text: str) -> str:
        """Transform a run of complete decoded characters."""
        ...

    # -- reader protocol -------------------------------------------------

    def readinto(self, buffer: Buffer) -> int:
        """Fill *buffer* with up to ``len(buffer)`` transformed bytes.

        Returns the number of bytes written, which is 0 only at
        end-of-stream (or for an empty *buffer*). Upstream errors propagate
        unchanged.
        """
        with memoryview(buffer) as view, view.cast("B") as target:
            size = len(target)
            if size == 0:
                return 0
            while not self._pending:
                if self._exhausted:
                    return 0
                self._fill(size)
            count = min(size, len(self._pending))
            target[:count] = self._pending[:count]
            del self._pending[:count]
            return count

    def read(self, size: int = -1, /) -> bytes:
        """Read up to *size* transformed bytes; all remaining bytes if negative."""
        if size < 0:
            chunks: list[bytes] = []
            while chunk := self.read(DEFAULT_READ_SIZE):
                chunks.append(chunk)
            return b"".join(chunks)
        buffer = bytearray(size)
        count = self.readinto(buffer)
        return bytes(buffer[:count])

    @property
    def exhausted(self) -> bool:
        """True once upstream reported end-of-stream and every byte was delivered."""
        return self._exhausted and not self._pending

    # -- fill cycle ------------------------------------------------------

    def _fill(self, size: int) -> None:
        """Run one fill cycle: read upstream and move decodable bytes to pending.

        Loops while upstream returns ``None`` and gives up after
        :data:`MAX_STALLED_READS` consecutive stalls.
        """
        stalls = 0
        chunk = self._upstream.read(size)
        while chunk is None:
            stalls += 1
            if stalls > MAX_STALLED_READS:
                msg = f"{self.name}: upstream made no progress after {stalls - 1} reads"
                raise UpstreamReadError(msg)
            chunk = self._upstream.read(size)

        if not chunk:
            self._exhausted = True
            tail = utf8.decode(self._carry) if self._carry else ""
            self._carry.clear()
            self._emit(self._transform(tail))
            logger.debug("%s: upstream exhausted", self.name)
            return

        self._carry += chunk
        boundary = utf8.complete_prefix_length(self._carry)
        if boundary:
            text = utf8.decode(self._carry[:boundary])
            del self._carry[:boundary]
            self._emit(self._transform(text))

    def _emit(self, text: str) -> None:
        if text:
            self._pending += utf8.encode(text)
