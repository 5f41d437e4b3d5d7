"""
Console Formatter Module

Human-readable, colored console output.
"""

import logging
from datetime import datetime

import colorama

from .json_formatter import extract_extra_fields


class ConsoleFormatter(logging.Formatter):
    """
    Formats records as ``[time] [LEVEL] [logger] message key=value ...``.
    """

    COLORS = {
        logging.DEBUG: colorama.Fore.CYAN,
        logging.INFO: colorama.Fore.GREEN,
        logging.WARNING: colorama.Fore.YELLOW,
        logging.ERROR: colorama.Fore.RED,
        logging.CRITICAL: colorama.Fore.RED + colorama.Style.BRIGHT
    }

    def __init__(self, use_colors: bool = True, show_timestamp: bool = True, show_extra: bool = True):
        """
        Args:
            use_colors: Whether to use ANSI color codes
            show_timestamp: Whether to show timestamps
            show_extra: Whether to append ``extra`` fields
        """
        super().__init__()
        self.use_colors = use_colors
        self.show_timestamp = show_timestamp
        self.show_extra = show_extra

        if self.use_colors:
            colorama.just_fix_windows_console()

    def format(self, record: logging.LogRecord) -> str:
        parts = []

        if self.show_timestamp:
            parts.append(f"[{datetime.fromtimestamp(record.created).strftime('%H:%M:%S')}]")

        parts.append(f"[{record.levelname}]")
        parts.append(f"[{self._shorten_logger_name(record.name)}]")
        parts.append(record.getMessage())

        if self.show_extra:
            extra = extract_extra_fields(record)
            if extra:
                parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))

        formatted = " ".join(parts)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, colorama.Fore.WHITE)
            formatted = f"{color}{formatted}{colorama.Style.RESET_ALL}"

        if record.exc_info:
            formatted += f"\n{self.formatException(record.exc_info)}"

        return formatted

    def _shorten_logger_name(self, name: str) -> str:
        # last two dotted parts
        parts = name.split('.')
        if len(parts) > 2:
            return '.'.join(parts[-2:])
        return name
