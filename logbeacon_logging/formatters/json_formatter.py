"""
JSON Formatter Module

Structured JSON lines for the internal log files.
"""

import json
import logging
import traceback
from datetime import datetime
from typing import Any, Dict

# Attributes every LogRecord carries; anything else arrived through ``extra``.
STANDARD_RECORD_FIELDS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'exc_info', 'exc_text', 'stack_info', 'lineno', 'funcName',
    'created', 'msecs', 'relativeCreated', 'thread', 'threadName', 'processName',
    'process', 'taskName', 'message', 'asctime'
}


def extract_extra_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """
    Collect the ``extra`` attributes attached to a log record.

    Args:
        record: Log record

    Returns:
        Dictionary of extra fields
    """
    return {
        key: value for key, value in record.__dict__.items()
        if not key.startswith('_') and key not in STANDARD_RECORD_FIELDS
    }


class JSONFormatter(logging.Formatter):
    """
    Formats log records as single-line JSON objects.
    """

    def __init__(self, include_extra: bool = True):
        """
        Args:
            include_extra: Whether to include extra fields from the log record
        """
        super().__init__()
        self.include_extra = include_extra

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc_value, exc_traceback = record.exc_info
            log_entry["exception"] = {
                "type": exc_type.__name__ if exc_type else "Unknown",
                "message": str(exc_value) if exc_value else "",
                "traceback": traceback.format_exception(exc_type, exc_value, exc_traceback)
            }

        if self.include_extra:
            extra_fields = extract_extra_fields(record)
            if extra_fields:
                log_entry["extra"] = extra_fields

        return json.dumps(log_entry, default=str, ensure_ascii=False)
