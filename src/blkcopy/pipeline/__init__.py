"""Streaming pipeline: bounded window source and composable text filters.

Stages depend on domain only. Data flows one way: raw source ->
BoundedWindow -> filters (in configured order) -> caller.
"""

from blkcopy.pipeline.base import ByteReader, StreamFilter
from blkcopy.pipeline.case import CaseFoldFilter
from blkcopy.pipeline.chain import FILTER_REGISTRY, build_chain
from blkcopy.pipeline.trim import WhitespaceTrimFilter
from blkcopy.pipeline.window import BoundedWindow

__all__ = [
    "FILTER_REGISTRY",
    "BoundedWindow",
    "ByteReader",
    "CaseFoldFilter",
    "StreamFilter",
    "WhitespaceTrimFilter",
    "build_chain",
]
