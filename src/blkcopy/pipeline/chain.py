"""Filter registry and chain composition.

Each transform name maps to a factory taking the upstream reader. The
composer wires the stages in the configured order on top of the bounded
window; the first name reads from the window, each later one from the
stage before it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from blkcopy.domain.transforms import TransformName, validate_transforms
from blkcopy.pipeline.base import ByteReader, StreamFilter
from blkcopy.pipeline.case import CaseFoldFilter
from blkcopy.pipeline.trim import WhitespaceTrimFilter
from blkcopy.pipeline.window import BoundedWindow

logger = logging.getLogger(__name__)

FilterFactory = Callable[[ByteReader], StreamFilter]

FILTER_REGISTRY: dict[TransformName, FilterFactory] = {
    TransformName.LOWER_CASE: lambda upstream: CaseFoldFilter(upstream, upper=False),
    TransformName.UPPER_CASE: lambda upstream: CaseFoldFilter(upstream, upper=True),
    TransformName.TRIM_SPACES: WhitespaceTrimFilter,
}


def build_chain(
    source: BoundedWindow, transforms: Iterable[str]
) -> BoundedWindow | StreamFilter:
    """Stack one filter per name in *transforms* on top of *source*.

    Names are validated before any filter is built, so a bad request never
    touches *source*. With no transforms, *source* itself is returned.

    Raises:
        ConfigError: Unknown name, or both case directions requested.
    """
    names = validate_transforms(transforms)
    head: BoundedWindow | StreamFilter = source
    for name in names:
        head = FILTER_REGISTRY[name](head)
    if names:
        logger.debug("Built filter chain: %s", " -> ".join(names))
    return head
