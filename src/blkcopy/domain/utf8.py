"""UTF-8 boundary helpers for chunked decoding.

Bytes arrive from upstream in arbitrary chunks, so a multi-byte sequence can
be split across two reads. :func:`complete_prefix_length` tells the caller how
many leading bytes can be decoded now; the rest must wait for more input.

Undecodable bytes are round-tripped with the ``surrogateescape`` error
handler: they decode to lone surrogates and encode back to the same bytes.
"""

from __future__ import annotations

ENCODING = "utf-8"
ERRORS = "surrogateescape"

# Longest incomplete tail: a 4-byte sequence missing its last byte.
MAX_INCOMPLETE_TAIL = 3


def sequence_length(lead: int) -> int:
    """Return the sequence length announced by lead byte *lead*.

    Continuation bytes and bytes that can never start a sequence report 1 so
    they are handed to the decoder immediately.
    """
    if lead < 0x80:
        return 1
    if 0xC0 <= lead < 0xE0:
        return 2
    if 0xE0 <= lead < 0xF0:
        return 3
    if 0xF0 <= lead < 0xF8:
        return 4
    return 1


def complete_prefix_length(data: bytes | bytearray) -> int:
    """Return the length of the longest prefix of *data* not ending mid-sequence.

    Only the last three bytes are inspected: if one of them is a lead byte whose
    sequence runs past the end of *data*, the prefix stops right before it.
    """
    size = len(data)
    for back in range(1, min(MAX_INCOMPLETE_TAIL, size) + 1):
        byte = data[size - back]
        if 0x80 <= byte < 0xC0:
            continue
        if sequence_length(byte) > back:
            return size - back
        return size
    return size


def decode(data: bytes | bytearray) -> str:
    return bytes(data).decode(ENCODING, ERRORS)


def encode(text: str) -> bytes:
    return text.encode(ENCODING, ERRORS)
