"""Tests for telemetry primitives: Span, trace_span, @traced."""

from __future__ import annotations

import pytest

from blkcopy.services.result import ServiceResult
from blkcopy.services.telemetry import (
    Span,
    _current_span,
    enable_telemetry,
    trace_span,
    traced,
)


class TestSpan:
    def test_duration_before_end_is_zero(self) -> None:
        assert Span(name="copy").duration_ms == 0.0

    def test_to_dict_minimal(self) -> None:
        span = Span(name="root")
        span.end()
        d = span.to_dict()
        assert d["name"] == "root"
        assert d["duration_ms"] >= 0
        assert "children" not in d
        assert "annotations" not in d

    def test_to_dict_nested(self) -> None:
        root = Span(name="root")
        child = Span(name="reader", parent=root)
        root.children.append(child)
        child.annotate("skip", 4)
        child.end()
        root.end()
        d = root.to_dict()
        assert d["children"][0]["name"] == "reader"
        assert d["children"][0]["annotations"] == {"skip": 4}


class TestTraceSpan:
    def test_disabled_yields_none(self) -> None:
        with trace_span("reader") as span:
            assert span is None

    def test_no_root_yields_none(self) -> None:
        enable_telemetry()
        with trace_span("reader") as span:
            assert span is None

    def test_child_recorded_under_root(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with trace_span("reader"), trace_span("open"):
                pass
        finally:
            _current_span.reset(token)
        assert [c.name for c in root.children] == ["reader"]
        assert root.children[0].children[0].name == "open"
        assert root.children[0].end_time is not None

    def test_failure_annotated(self) -> None:
        enable_telemetry()
        root = Span(name="root")
        token = _current_span.set(root)
        try:
            with pytest.raises(OSError), trace_span("writer"):
                raise OSError("disk full")
        finally:
            _current_span.reset(token)
        assert root.children[0].annotations == {"error": "OSError"}
        assert _current_span.get() is None


class TestTraced:
    def test_noop_when_disabled(self) -> None:
        @traced
        def run() -> ServiceResult:
            return ServiceResult(ok=True, op="copy")

        assert run().meta is None

    def test_injects_span_tree(self) -> None:
        @traced
        def run() -> ServiceResult:
            with trace_span("reader"):
                pass
            with trace_span("copy"):
                pass
            return ServiceResult(ok=True, op="copy", meta={"existing": 1})

        enable_telemetry()
        result = run()
        assert result.meta is not None
        assert result.meta["existing"] == 1
        tree = result.meta["telemetry"]
        assert tree["name"].endswith("run")
        assert [c["name"] for c in tree["children"]] == ["reader", "copy"]

    def test_failed_result_still_traced(self) -> None:
        @traced
        def run() -> ServiceResult:
            return ServiceResult(ok=False, op="copy")

        enable_telemetry()
        assert "telemetry" in (run().meta or {})

    def test_exception_propagates_and_resets(self) -> None:
        @traced
        def run() -> ServiceResult:
            raise RuntimeError("bug")

        enable_telemetry()
        with pytest.raises(RuntimeError):
            run()
        assert _current_span.get() is None

    def test_non_result_passthrough(self) -> None:
        @traced
        def run() -> str:
            return "plain"

        enable_telemetry()
        assert run() == "plain"
