"""CopyService: one run of source -> window -> filters -> sink.

Phases run strictly in order and each failure is tagged with its phase:

1. reader: open the source, skip the offset, apply the limit, build filters
2. writer: create the sink (never overwriting an existing file)
3. copy:   pull block-sized reads through the chain into the sink

Every file handle opened for the run is released on every exit path.
Partial writes are left in place when a run fails.
"""

from __future__ import annotations

from contextlib import ExitStack
from dataclasses import dataclass
from typing import TYPE_CHECKING, BinaryIO, Protocol

import structlog

from blkcopy.domain.errors import BlkcopyError, SinkWriteError, UpstreamReadError
from blkcopy.infrastructure.streams import describe, open_sink, open_source
from blkcopy.pipeline.base import MAX_STALLED_READS
from blkcopy.pipeline.chain import build_chain
from blkcopy.pipeline.window import BoundedWindow
from blkcopy.services.result import ServiceResult
from blkcopy.services.telemetry import trace_span, traced

if TYPE_CHECKING:
    from collections.abc import Buffer

    from blkcopy.config.models import CopyOptions

log = structlog.get_logger(__name__)


class BlockReader(Protocol):
    def readinto(self, buffer: Buffer, /) -> int | None: ...


@dataclass(frozen=True)
class CopyStats:
    """Totals of one copy loop."""

    bytes_written: int
    blocks: int


def _write_all(sink: BinaryIO, block: memoryview) -> None:
    """Write all of *block*, retrying short writes from raw sinks."""
    offset = 0
    while offset < len(block):
        try:
            written = sink.write(block[offset:])
        except OSError as exc:
            msg = f"writing sink failed: {exc}"
            raise SinkWriteError(msg) from exc
        if not written:
            msg = f"sink accepted no bytes ({offset} of {len(block)} written)"
            raise SinkWriteError(msg)
        offset += written


def copy_blocks(reader: BlockReader, sink: BinaryIO, block_size: int) -> CopyStats:
    """Copy everything *reader* produces into *sink*, one block at a time.

    A single buffer of *block_size* bytes is reused for every read; each
    filled slice is written before the next read.
    """
    total = 0
    blocks = 0
    stalls = 0
    with memoryview(bytearray(block_size)) as buf:
        while True:
            count = reader.readinto(buf)
            if count is None:
                stalls += 1
                if stalls > MAX_STALLED_READS:
                    msg = f"source made no progress after {MAX_STALLED_READS} reads"
                    raise UpstreamReadError(msg)
                continue
            stalls = 0
            if not count:
                break
            with buf[:count] as block:
                _write_all(sink, block)
            total += count
            blocks += 1
    try:
        sink.flush()
    except OSError as exc:
        msg = f"flushing sink failed: {exc}"
        raise SinkWriteError(msg) from exc
    return CopyStats(bytes_written=total, blocks=blocks)


class CopyService:
    """Run a single copy described by :class:`CopyOptions`.

    *stdin* and *stdout* replace the process streams when the options leave
    the source or sink unset (used by tests and embedding callers).
    """

    def __init__(
        self,
        options: CopyOptions,
        *,
        stdin: BinaryIO | None = None,
        stdout: BinaryIO | None = None,
    ) -> None:
        self._options = options
        self._stdin = stdin
        self._stdout = stdout

    @traced
    def copy(self) -> ServiceResult:
        """Copy the configured window of the source into the sink."""
        opts = self._options
        transforms = [str(name) for name in opts.transforms]
        source_label = describe(opts.source, stdio="stdin")
        sink_label = describe(opts.sink, stdio="stdout")
        log.debug(
            "copy.start",
            source=source_label,
            sink=sink_label,
            skip=opts.skip,
            limit=opts.limit,
            block_size=opts.block_size,
            transforms=transforms,
        )

        try:
            with ExitStack() as stack:
                with trace_span("reader"):
                    raw = stack.enter_context(open_source(opts.source, stdin=self._stdin))
                    window = BoundedWindow(raw, skip=opts.skip, limit=opts.limit)
                    head = build_chain(window, opts.transforms)
                with trace_span("writer"):
                    sink = stack.enter_context(open_sink(opts.sink, stdout=self._stdout))
                with trace_span("copy") as span:
                    stats = copy_blocks(head, sink, opts.block_size)
                    if span is not None:
                        span.annotate("blocks", stats.blocks)
        except BlkcopyError as exc:
            log.info("copy.failed", code=exc.code, phase=exc.phase, error=str(exc))
            return ServiceResult.failure("copy", exc)

        log.debug(
            "copy.complete",
            bytes_read=window.position,
            bytes_written=stats.bytes_written,
            blocks=stats.blocks,
        )
        return ServiceResult(
            ok=True,
            op="copy",
            data={
                "source": source_label,
                "sink": sink_label,
                "bytes_read": window.position,
                "bytes_written": stats.bytes_written,
                "blocks": stats.blocks,
                "transforms": transforms,
            },
        )
