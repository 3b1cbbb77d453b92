"""Tests for CaseFoldFilter: delivery contract and boundary safety."""

import io

import pytest

from blkcopy.domain.errors import UpstreamReadError
from blkcopy.pipeline.base import MAX_STALLED_READS
from blkcopy.pipeline.case import CaseFoldFilter
from blkcopy.pipeline.window import BoundedWindow


def _upper(data: bytes) -> CaseFoldFilter:
    return CaseFoldFilter(io.BytesIO(data), upper=True)


class TestCaseFolding:
    def test_upper(self, drain) -> None:
        assert drain(_upper(b"HeLLo"), 1024) == b"HELLO"

    def test_lower(self, drain) -> None:
        f = CaseFoldFilter(io.BytesIO(b"HeLLo"), upper=False)
        assert drain(f, 1024) == b"hello"

    def test_names(self) -> None:
        assert CaseFoldFilter(io.BytesIO(), upper=True).name == "upper_case"
        assert CaseFoldFilter(io.BytesIO(), upper=False).name == "lower_case"

    def test_cyrillic_one_byte_reads(self, drain) -> None:
        data = "Привет, Мир".encode()
        assert drain(_upper(data), 1) == "ПРИВЕТ, МИР".encode()

    def test_expansion_larger_than_request(self, drain) -> None:
        # "ß" is 2 bytes in, "SS" is 2 bytes out; "ŉ" (2 bytes) uppercases to 3 bytes.
        data = "ßŉ".encode()
        assert drain(_upper(data), 1) == "SSʼN".encode()

    def test_empty_input(self) -> None:
        assert _upper(b"").read(10) == b""

    def test_whitespace_untouched(self, drain) -> None:
        assert drain(_upper(b"  a\tb \n"), 3) == b"  A\tB \n"


class TestDeliveryContract:
    def test_small_buffer_keeps_remainder(self) -> None:
        f = _upper(b"abcdef")
        buf = bytearray(2)
        assert f.readinto(buf) == 2
        assert bytes(buf) == b"AB"
        assert f.read(100) == b"CDEF"

    def test_large_buffer_reports_shorter_length(self) -> None:
        f = _upper(b"abc")
        buf = bytearray(10)
        n = f.readinto(buf)
        assert n == 3
        assert bytes(buf[:n]) == b"ABC"

    def test_empty_buffer(self) -> None:
        assert _upper(b"abc").readinto(bytearray()) == 0

    def test_end_of_stream_is_sticky(self) -> None:
        f = _upper(b"a")
        assert f.read(10) == b"A"
        assert f.read(10) == b""
        assert f.read(10) == b""
        assert f.exhausted

    def test_read_all(self) -> None:
        assert _upper(b"abc" * 5000).read() == b"ABC" * 5000

    def test_readinto_memoryview(self) -> None:
        f = _upper(b"xyz")
        buf = bytearray(5)
        assert f.readinto(memoryview(buf)[1:4]) == 3
        assert bytes(buf) == b"\x00XYZ\x00"


class TestBoundarySafety:
    def test_split_multibyte_across_reads(self, scripted, drain) -> None:
        euro = "€".encode()
        f = CaseFoldFilter(scripted([b"a" + euro[:1], euro[1:2], euro[2:] + b"b"]), upper=True)
        assert drain(f, 64) == "A€B".encode()

    def test_no_output_until_sequence_completes(self, scripted) -> None:
        smile = "😀".encode()
        upstream = scripted([smile[:1], smile[1:2], smile[2:3], smile[3:]])
        f = CaseFoldFilter(upstream, upper=True)
        assert f.read(16) == smile
        assert upstream.calls == 4

    def test_truncated_sequence_at_end_flushed_raw(self, drain) -> None:
        data = b"ab" + "€".encode()[:2]
        assert drain(_upper(data), 1) == b"AB" + "€".encode()[:2]

    def test_invalid_bytes_pass_through(self, drain) -> None:
        assert drain(_upper(b"a\xffb\xc3(c"), 2) == b"A\xffB\xc3(C"

    def test_over_windowed_source(self, drain) -> None:
        window = BoundedWindow(io.BytesIO("xxпривет".encode()), skip=2, limit=6)
        assert drain(CaseFoldFilter(window, upper=True), 1) == "ПРИ".encode()


class TestUpstreamErrors:
    def test_read_error_propagates(self, failing_reader) -> None:
        f = CaseFoldFilter(BoundedWindow(failing_reader), upper=True)
        with pytest.raises(UpstreamReadError):
            f.read(4)

    def test_raw_oserror_propagates_unchanged(self, failing_reader) -> None:
        f = CaseFoldFilter(failing_reader, upper=True)
        with pytest.raises(OSError):
            f.read(4)

    def test_stalls_are_retried(self, scripted) -> None:
        f = CaseFoldFilter(scripted([None, None, b"ok"]), upper=True)
        assert f.read(4) == b"OK"

    def test_endless_stall_gives_up(self, scripted) -> None:
        f = CaseFoldFilter(scripted([None] * (MAX_STALLED_READS + 5)), upper=True)
        with pytest.raises(UpstreamReadError, match="no progress"):
            f.read(4)
