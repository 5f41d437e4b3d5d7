"""
Logging Handlers

Console and rotating file destinations for the internal loggers.
"""

from .file_handler import FileHandler
from .console_handler import ConsoleHandler

__all__ = ["FileHandler", "ConsoleHandler"]
