"""
Shared fixtures and fakes for the LogBeacon tests.
"""

from typing import List, Sequence, Tuple

import pytest

from pipeline.log_pipeline import LogPipeline
from schemas.log_schemas import LogRecord, PipelineConfig, StackFrame
from tools.collaborators import StaticLocation
from tools.stack_trace_tool import StackTraceResolver


class RecordingTransport:
    """Keeps every (endpoint, record) pair it is handed."""

    def __init__(self):
        self.sent: List[Tuple[str, LogRecord]] = []

    def send(self, endpoint: str, record: LogRecord) -> None:
        self.sent.append((endpoint, record))

    @property
    def records(self) -> List[LogRecord]:
        return [record for _, record in self.sent]


class FakeSession:
    def __init__(self, session_id: str = "session-1"):
        self.session_id = session_id


class FakeBrowser:
    def __init__(self, identity: str = "Firefox 128"):
        self.identity = identity
        self.calls = 0

    def get_vendor_and_version(self) -> str:
        self.calls += 1
        return self.identity


class ListFrameBackend:
    """Returns a fixed list of frames for any error."""

    def __init__(self, frames: Sequence[StackFrame]):
        self.frames = list(frames)

    async def resolve_frames(self, error):
        return self.frames


def make_frames(count: int, file_name: str = "/node_modules/lib.js") -> List[StackFrame]:
    return [
        StackFrame(function_name=f"fn{i}", file_name=file_name, line_number=i + 1, column_number=3)
        for i in range(count)
    ]


@pytest.fixture
def config() -> PipelineConfig:
    return PipelineConfig(app_name="shop", log_endpoint="https://logs.example.com/ingest", environment="staging")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def browser() -> FakeBrowser:
    return FakeBrowser()


@pytest.fixture
def make_pipeline(transport, session, browser):
    """Build an uninitialized pipeline; pass ``frames`` to control trace resolution."""

    def _make(frames=None, **kwargs) -> LogPipeline:
        if frames is not None:
            kwargs.setdefault("stack_trace_resolver", StackTraceResolver(ListFrameBackend(frames)))
        kwargs.setdefault("location", StaticLocation("https://app.example.com/cart"))
        return LogPipeline(transport, session_provider=session, browser_identity=browser, **kwargs)

    return _make


@pytest.fixture
def pipeline(make_pipeline, config) -> LogPipeline:
    pipeline = make_pipeline()
    pipeline.initialize(config)
    return pipeline
