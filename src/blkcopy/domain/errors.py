"""Error taxonomy for a copy run.

Every failure carries a stable ``code`` (surfaced in ``ServiceError.code``)
and the ``phase`` of the run it belongs to, so the CLI can tell the user
whether flag parsing, reader construction, writer construction, or the copy
itself failed.

End-of-stream is not an error: readers signal it with an empty read.
"""

from __future__ import annotations

from typing import ClassVar


class BlkcopyError(Exception):
    """Base class for all blkcopy failures."""

    code: ClassVar[str] = "BLKCOPY_ERROR"
    phase: ClassVar[str] = "copy"


class ConfigError(BlkcopyError):
    """Invalid or conflicting configuration, detected before any I/O."""

    code = "CONFIG_ERROR"
    phase = "flags"


class SourceUnavailable(BlkcopyError):
    """The source path cannot be opened."""

    code = "SOURCE_UNAVAILABLE"
    phase = "reader"


class IncompleteSkip(BlkcopyError):
    """The source ended before the configured offset was skipped."""

    code = "INCOMPLETE_SKIP"
    phase = "reader"

    def __init__(self, requested: int, skipped: int) -> None:
        super().__init__(f"source ended after {skipped} of {requested} bytes to skip")
        self.requested = requested
        self.skipped = skipped


class SinkConflict(BlkcopyError):
    """The sink path already exists."""

    code = "SINK_CONFLICT"
    phase = "writer"


class SinkUnavailable(BlkcopyError):
    """The sink path cannot be created."""

    code = "SINK_UNAVAILABLE"
    phase = "writer"


class UpstreamReadError(BlkcopyError):
    """Reading the underlying source failed or stopped making progress."""

    code = "UPSTREAM_READ_ERROR"
    phase = "copy"


class SkipReadError(UpstreamReadError):
    """Reading the source failed while the offset was being skipped."""

    phase = "reader"


class SinkWriteError(BlkcopyError):
    """Writing to the sink failed."""

    code = "SINK_WRITE_ERROR"
    phase = "copy"
