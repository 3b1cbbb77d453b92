"""WhitespaceTrimFilter: strip the stream and collapse inner whitespace runs.

Rules, with whitespace being the Unicode White_Space characters
(:func:`~blkcopy.domain.transforms.is_whitespace`):

- whitespace before the first non-whitespace character is dropped;
- a run between two non-whitespace characters collapses to the run's first
  character (``"a\\t\\t b"`` becomes ``"a\\tb"``);
- whitespace after the last non-whitespace character is dropped.

A whitespace-only stream therefore produces no output at all.
"""

from __future__ import annotations

from blkcopy.domain.transforms import is_whitespace
from blkcopy.pipeline.base import ByteReader, StreamFilter


class WhitespaceTrimFilter(StreamFilter):
    """Trim and collapse whitespace across arbitrary read boundaries.

    The first character of the current run is held back until a
    non-whitespace character proves the run is internal; if the stream
    ends first, it is discarded.
    """

    name = "trim_spaces"

    def __init__(self, upstream: ByteReader) -> None:
        super().__init__(upstream)
        self._seen_content = False
        self._held: str | None = None

    def _transform(self, text: str) -> str:
        out: list[str] = []
        for ch in text:
            if is_whitespace(ch):
                if self._seen_content and self._held is None:
                    self._held = ch
                continue
            if self._held is not None:
                out.append(self._held)
                self._held = None
            self._seen_content = True
            out.append(ch)
        return "".join(out)
