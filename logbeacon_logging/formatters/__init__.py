"""
Logging Formatters

Console and JSON output formats for the internal loggers.
"""

from .json_formatter import JSONFormatter
from .console_formatter import ConsoleFormatter

__all__ = ["JSONFormatter", "ConsoleFormatter"]
