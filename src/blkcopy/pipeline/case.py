"""CaseFoldFilter: uppercase or lowercase every decoded character."""

from __future__ import annotations

from blkcopy.domain.transforms import fold_case
from blkcopy.pipeline.base import ByteReader, StreamFilter


class CaseFoldFilter(StreamFilter):
    """Convert the stream to one case, character by character.

    Case mapping may change the encoded length (``"ß"`` uppercases to
    ``"SS"``); the pending buffer absorbs the difference. Undecodable bytes
    pass through untouched.
    """

    def __init__(self, upstream: ByteReader, *, upper: bool) -> None:
        super().__init__(upstream)
        self.upper = upper
        self.name = "upper_case" if upper else "lower_case"

    def _transform(self, text: str) -> str:
        return fold_case(text, upper=self.upper)
