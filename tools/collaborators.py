"""
Collaborator interfaces consumed by the log pipeline, with default
implementations for a plain Python process.
"""

import asyncio
import platform
import traceback
import uuid
from typing import List, Optional, Protocol, Sequence, runtime_checkable

from logbeacon_logging.core.logger_factory import LoggerFactory
from schemas.log_schemas import StackFrame

UNKNOWN_BROWSER = "Unknown browser"


@runtime_checkable
class BrowserIdentity(Protocol):
    def get_vendor_and_version(self) -> str: ...


@runtime_checkable
class SessionProvider(Protocol):
    session_id: str


@runtime_checkable
class LocationProvider(Protocol):
    href: str


@runtime_checkable
class StackResolverBackend(Protocol):
    async def resolve_frames(self, error: BaseException) -> Sequence[StackFrame]: ...


class PlatformBrowserIdentity:
    """Reports the interpreter and OS as the client identity."""

    def get_vendor_and_version(self) -> str:
        logger = LoggerFactory().get_logger("logbeacon.tools.collaborators")
        try:
            identity = (
                f"{platform.python_implementation()} {platform.python_version()}"
                f" ({platform.system()} {platform.release()})"
            ).strip()
        except OSError as e:
            logger.warning(f"Could not read platform identity: {e}")
            return UNKNOWN_BROWSER
        return identity or UNKNOWN_BROWSER


class UuidSessionProvider:
    """Session id that lives until ``rotate`` is called."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or str(uuid.uuid4())

    def rotate(self) -> str:
        self.session_id = str(uuid.uuid4())
        LoggerFactory().get_logger("logbeacon.tools.collaborators").debug(
            "Session rotated", extra={"session_id": self.session_id})
        return self.session_id


class StaticLocation:
    """Fixed ``href`` used for the ``url`` field."""

    def __init__(self, href: str = ""):
        self.href = href


class TracebackFrameBackend:
    """
    Builds frames from an exception's traceback, innermost frame first.

    Frame extraction reads source lines through ``linecache``, so it runs in a
    worker thread instead of on the event loop.
    """

    async def resolve_frames(self, error: BaseException) -> Sequence[StackFrame]:
        return await asyncio.to_thread(self._extract, error)

    @staticmethod
    def _extract(error: BaseException) -> List[StackFrame]:
        if not isinstance(error, BaseException):
            raise TypeError(f"Expected an exception, got {type(error).__name__}")

        summary = traceback.extract_tb(error.__traceback__)
        frames = [
            StackFrame(
                function_name=frame.name or "<anonymous>",
                file_name=frame.filename or "<unknown>",
                line_number=frame.lineno or 0,
                # colno is only populated on 3.11+
                column_number=(getattr(frame, "colno", None) or 0),
            )
            for frame in summary
        ]
        frames.reverse()
        return frames
