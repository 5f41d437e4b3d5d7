"""Tests for stack trace resolution."""

import asyncio

import pytest

from schemas.log_schemas import StackFrame
from tools.collaborators import TracebackFrameBackend
from tools.stack_trace_tool import FRAME_SEPARATOR, MAX_FRAMES, StackTraceResolver

from .conftest import ListFrameBackend, make_frames


def _recurse(depth: int):
    if depth == 0:
        raise RuntimeError("bottom reached")
    _recurse(depth - 1)


def _raised(depth: int = 0) -> RuntimeError:
    try:
        _recurse(depth)
    except RuntimeError as e:
        return e
    raise AssertionError("expected RuntimeError")


class FailingBackend:
    async def resolve_frames(self, error):
        raise ValueError("source map is malformed")


class HangingBackend:
    async def resolve_frames(self, error):
        await asyncio.Event().wait()


class TestStackTraceResolver:
    @pytest.mark.asyncio
    async def test_fifteen_frames_resolve_to_ten(self):
        resolver = StackTraceResolver(ListFrameBackend(make_frames(15)))

        trace = await resolver.resolve(RuntimeError("boom"))

        parts = trace.split(FRAME_SEPARATOR)
        assert len(parts) == MAX_FRAMES == 10
        assert parts[0] == "fn0@/node_modules/lib.js:1:3"
        assert parts[-1] == "fn9@/node_modules/lib.js:10:3"

    @pytest.mark.asyncio
    async def test_short_trace_is_kept_whole(self):
        resolver = StackTraceResolver(ListFrameBackend(make_frames(3)))
        trace = await resolver.resolve(RuntimeError("boom"))
        assert trace.split(FRAME_SEPARATOR) == [
            "fn0@/node_modules/lib.js:1:3",
            "fn1@/node_modules/lib.js:2:3",
            "fn2@/node_modules/lib.js:3:3",
        ]

    @pytest.mark.asyncio
    async def test_backend_failure_yields_empty_trace(self):
        resolver = StackTraceResolver(FailingBackend())
        assert await resolver.resolve(RuntimeError("boom")) == ""

    @pytest.mark.asyncio
    async def test_timeout_yields_empty_trace(self):
        resolver = StackTraceResolver(HangingBackend(), timeout=0.05)
        assert await resolver.resolve(RuntimeError("boom")) == ""

    @pytest.mark.asyncio
    async def test_real_traceback_is_bounded_and_innermost_first(self):
        resolver = StackTraceResolver()

        trace = await resolver.resolve(_raised(depth=20))

        parts = trace.split(FRAME_SEPARATOR)
        assert len(parts) == MAX_FRAMES
        assert parts[0].startswith("_recurse@")
        assert "test_stack_trace_tool.py" in parts[0]

    @pytest.mark.asyncio
    async def test_unraised_error_has_empty_trace(self):
        resolver = StackTraceResolver()
        assert await resolver.resolve(RuntimeError("never raised")) == ""


class TestTracebackFrameBackend:
    @pytest.mark.asyncio
    async def test_frames_point_at_raise_site(self):
        frames = await TracebackFrameBackend().resolve_frames(_raised())

        assert frames[0].function_name == "_recurse"
        assert frames[-1].function_name == "_raised"
        assert all(frame.line_number > 0 for frame in frames)

    @pytest.mark.asyncio
    async def test_rejects_non_exceptions(self):
        with pytest.raises(TypeError):
            await TracebackFrameBackend().resolve_frames("not an error")


def test_stack_frame_rendering():
    frame = StackFrame(function_name="checkout", file_name="/src/app/cart.ts", line_number=42, column_number=7)
    assert str(frame) == "checkout@/src/app/cart.ts:42:7"
