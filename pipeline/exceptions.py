"""
Exceptions raised by the log pipeline and its transports.
"""


class LogPipelineError(Exception):
    """Base class for pipeline errors."""


class PipelineNotInitializedError(LogPipelineError):
    """A logging operation was called before ``initialize``."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(
            f"LogPipeline.{operation}() called before initialize(); "
            "configure the pipeline with a PipelineConfig first"
        )


class TransportResponseError(LogPipelineError):
    """The log endpoint answered with a non-success status."""

    def __init__(self, endpoint: str, status: int, body: str = ""):
        self.endpoint = endpoint
        self.status = status
        self.body = body
        super().__init__(f"Log endpoint {endpoint} returned HTTP {status}")


class RemoteLoggedError(Exception):
    """Message-only stand-in for an error that carried a transport status."""
