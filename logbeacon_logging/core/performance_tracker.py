"""
Performance Tracker Module

Context manager for timing pipeline operations such as trace resolution.
"""

import logging
import time
from typing import Any, Dict, Optional


class PerformanceTracker:
    """
    Times the enclosed block and logs the duration on exit.
    """

    def __init__(self, operation: str, logger: Optional[logging.Logger] = None, log_level: int = logging.DEBUG):
        """
        Args:
            operation: Name of the operation being tracked
            logger: Logger to report to (defaults to ``logbeacon.performance``)
            log_level: Level for the start/completion messages
        """
        self.operation = operation
        self.logger = logger or logging.getLogger("logbeacon.performance")
        self.log_level = log_level
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.metadata: Dict[str, Any] = {}

    def __enter__(self):
        self.start_time = time.perf_counter()
        self.logger.log(self.log_level, f"Started operation: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.end_time = time.perf_counter()

        message = f"Completed operation: {self.operation} in {self.elapsed_ms:.2f}ms"
        if self.metadata:
            message += " (" + ", ".join(f"{k}={v}" for k, v in self.metadata.items()) + ")"

        if exc_type is not None:
            message += f" (FAILED: {exc_type.__name__})"
            self.logger.warning(message)
        else:
            self.logger.log(self.log_level, message)

    def add_metadata(self, key: str, value: Any) -> None:
        self.metadata[key] = value

    def get_duration(self) -> Optional[float]:
        """
        Returns:
            Duration in seconds, or None if not yet completed
        """
        if self.start_time is not None and self.end_time is not None:
            return self.end_time - self.start_time
        return None

    @property
    def elapsed_ms(self) -> float:
        """Milliseconds since entering, or the final duration once exited."""
        if self.start_time is None:
            return 0.0
        end = self.end_time if self.end_time is not None else time.perf_counter()
        return (end - self.start_time) * 1000
