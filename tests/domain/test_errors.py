"""Tests for the error taxonomy."""

import pytest

from blkcopy.domain.errors import (
    BlkcopyError,
    ConfigError,
    IncompleteSkip,
    SinkConflict,
    SinkUnavailable,
    SinkWriteError,
    SkipReadError,
    SourceUnavailable,
    UpstreamReadError,
)


@pytest.mark.parametrize(
    ("cls", "code", "phase"),
    [
        (ConfigError, "CONFIG_ERROR", "flags"),
        (SourceUnavailable, "SOURCE_UNAVAILABLE", "reader"),
        (SinkConflict, "SINK_CONFLICT", "writer"),
        (SinkUnavailable, "SINK_UNAVAILABLE", "writer"),
        (UpstreamReadError, "UPSTREAM_READ_ERROR", "copy"),
        (SkipReadError, "UPSTREAM_READ_ERROR", "reader"),
        (SinkWriteError, "SINK_WRITE_ERROR", "copy"),
    ],
)
def test_codes_and_phases(cls: type[BlkcopyError], code: str, phase: str) -> None:
    exc = cls("boom")
    assert isinstance(exc, BlkcopyError)
    assert exc.code == code
    assert exc.phase == phase
    assert str(exc) == "boom"


class TestIncompleteSkip:
    def test_message_and_fields(self) -> None:
        exc = IncompleteSkip(10, 4)
        assert exc.requested == 10
        assert exc.skipped == 4
        assert "4 of 10" in str(exc)
        assert exc.code == "INCOMPLETE_SKIP"
        assert exc.phase == "reader"
