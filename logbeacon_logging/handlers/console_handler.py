"""
Console Handler Module

Stream handler that flushes after every record and falls back to stderr.
"""

import logging
import sys
from typing import Optional, TextIO


class ConsoleHandler(logging.StreamHandler):
    """
    StreamHandler flushed per record. Without an explicit stream it writes to
    whatever ``sys.stderr`` is at emit time.
    """

    def __init__(self, stream: Optional[TextIO] = None, auto_flush: bool = True):
        """
        Args:
            stream: Output stream (defaults to the current stderr)
            auto_flush: Whether to flush after each write
        """
        super().__init__(stream if stream is not None else sys.stderr)
        self._follow_stderr = stream is None
        self.auto_flush = auto_flush

    def emit(self, record: logging.LogRecord) -> None:
        if self._follow_stderr:
            self.stream = sys.stderr
        try:
            super().emit(record)
            if self.auto_flush:
                self.flush()
        except Exception:
            self._handle_emit_error(record)

    def _handle_emit_error(self, record: logging.LogRecord) -> None:
        # The configured stream is unusable; try the interpreter's original stderr.
        if self.stream is not sys.__stderr__ and sys.__stderr__ is not None:
            sys.__stderr__.write(f"Console logging failed: {record.getMessage()}\n")
        else:
            self.handleError(record)

    @property
    def is_tty(self) -> bool:
        return hasattr(self.stream, 'isatty') and self.stream.isatty()

    @property
    def supports_color(self) -> bool:
        return self.is_tty
