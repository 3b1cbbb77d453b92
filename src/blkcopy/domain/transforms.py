"""Transform names, validation rules, and per-character text mappings.

INVARIANT: at most one case direction per run. ``upper_case`` and
``lower_case`` together are a configuration error, as is any name not in
:class:`TransformName`.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import StrEnum

from blkcopy.domain.errors import ConfigError


class TransformName(StrEnum):
    """Transforms that can be applied to the copied stream."""

    LOWER_CASE = "lower_case"
    UPPER_CASE = "upper_case"
    TRIM_SPACES = "trim_spaces"


TRANSFORM_DESCRIPTIONS: dict[TransformName, str] = {
    TransformName.LOWER_CASE: "Convert every character to lowercase.",
    TransformName.UPPER_CASE: "Convert every character to uppercase.",
    TransformName.TRIM_SPACES: (
        "Drop leading and trailing whitespace; collapse inner runs to their first character."
    ),
}

_CASE_DIRECTIONS = frozenset({TransformName.LOWER_CASE, TransformName.UPPER_CASE})


def split_transforms(raw: str) -> list[str]:
    """Split a comma-separated ``--conv`` value into names.

    An empty string means no transforms. Surrounding whitespace around each
    name is ignored.
    """
    if not raw.strip():
        return []
    return [part.strip() for part in raw.split(",")]


def validate_transforms(names: Iterable[str]) -> tuple[TransformName, ...]:
    """Validate *names* and return them as an ordered tuple of TransformName.

    Raises:
        ConfigError: On an unknown name or when both case directions are requested.
    """
    result: list[TransformName] = []
    for name in names:
        try:
            result.append(TransformName(name))
        except ValueError:
            valid = ", ".join(t.value for t in TransformName)
            msg = f"unknown transform {name!r} (expected one of: {valid})"
            raise ConfigError(msg) from None

    if _CASE_DIRECTIONS <= set(result):
        msg = "lower_case and upper_case cannot be combined"
        raise ConfigError(msg)
    return tuple(result)


def fold_case(text: str, *, upper: bool) -> str:
    """Map each character of *text* to upper or lower case independently.

    Mapping character by character keeps the result independent of how the
    text was split into chunks (``str.lower`` on a whole string applies
    context rules such as Greek final sigma).
    """
    convert = str.upper if upper else str.lower
    return "".join(convert(ch) for ch in text)


# str.isspace also accepts the ASCII information separators U+001C..U+001F,
# which lack the Unicode White_Space property.
_INFORMATION_SEPARATORS = frozenset("\x1c\x1d\x1e\x1f")


def is_whitespace(ch: str) -> bool:
    """Return True if *ch* has the Unicode White_Space property."""
    return ch.isspace() and ch not in _INFORMATION_SEPARATORS
