"""
Core Logging Components

Contains LoggerFactory, PerformanceTracker and ErrorEnhancer.
"""

from .logger_factory import LoggerFactory
from .performance_tracker import PerformanceTracker
from .error_enhancer import ErrorEnhancer

__all__ = ["LoggerFactory", "PerformanceTracker", "ErrorEnhancer"]
