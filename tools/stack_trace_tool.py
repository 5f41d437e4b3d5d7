import asyncio
from typing import Optional

from logbeacon_logging.core.logger_factory import LoggerFactory
from logbeacon_logging.core.performance_tracker import PerformanceTracker
from tools.collaborators import StackResolverBackend, TracebackFrameBackend

MAX_FRAMES = 10
FRAME_SEPARATOR = ","


class StackTraceResolver:
    """
    Turns a raised error into a bounded, single-line trace string.

    At most the first ``MAX_FRAMES`` frames are kept, each rendered as
    ``function@file:line:column`` and joined with ``FRAME_SEPARATOR``. Any
    failure while resolving yields an empty string; ``resolve`` never raises.
    """

    def __init__(self, backend: Optional[StackResolverBackend] = None, timeout: Optional[float] = None):
        """
        Args:
            backend: Frame source, defaults to the exception's own traceback
            timeout: Seconds to wait for the backend; None waits indefinitely
        """
        self.backend = backend or TracebackFrameBackend()
        self.timeout = timeout
        self.logger = LoggerFactory().get_logger("logbeacon.tools.stack_trace")

    async def resolve(self, error: BaseException) -> str:
        with PerformanceTracker("stack_trace_resolution", self.logger) as tracker:
            try:
                frames = await asyncio.wait_for(self.backend.resolve_frames(error), timeout=self.timeout)
                rendered = [str(frame) for frame in list(frames)[:MAX_FRAMES]]
            except asyncio.TimeoutError:
                self.logger.warning("Stack trace resolution timed out", extra={
                    "timeout_seconds": self.timeout,
                    "error_type": type(error).__name__
                })
                return ""
            except Exception as e:
                self.logger.warning(f"Stack trace resolution failed: {e}", extra={
                    "error_type": type(error).__name__
                })
                return ""

            tracker.add_metadata("frames", len(rendered))

        return FRAME_SEPARATOR.join(rendered)
