"""
LogBeacon Internal Logging

Local diagnostics for the pipeline itself: logger management, console and
JSON formatting, error enhancement and timing.
"""

from .core import ErrorEnhancer, LoggerFactory, PerformanceTracker

__version__ = "1.0.0"
__all__ = ["LoggerFactory", "PerformanceTracker", "ErrorEnhancer"]
