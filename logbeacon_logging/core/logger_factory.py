"""
Logger Factory Module

Provides a singleton LoggerFactory that configures the ``logbeacon`` logger
tree once and hands out component loggers with verbose control.
"""

import json
import logging
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from utils.timestamp_utils import generate_log_filename


ROOT_LOGGER_NAME = "logbeacon"

LEVEL_MAPPING = {
    'minimal': logging.ERROR,
    'normal': logging.INFO,
    'verbose': logging.DEBUG,
    'debug': logging.DEBUG
}


class LoggerFactory:
    """
    Singleton factory for the pipeline's internal loggers.

    Handles:
    - Global verbose levels (minimal, normal, verbose, debug)
    - Component-specific overrides
    - Optional rotating JSON file output
    """

    _instance: Optional['LoggerFactory'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'LoggerFactory':
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        if hasattr(self, '_initialized'):
            return

        self._initialized = True
        self._loggers: Dict[str, logging.Logger] = {}
        self._verbose_level = "normal"
        self._component_overrides: Dict[str, str] = {}
        self._file_logging: Dict[str, Any] = {}

        self._load_configuration()

    def _load_configuration(self) -> None:
        """Read log_levels.json and attach handlers to the logbeacon logger."""
        levels_file = Path(__file__).parent.parent / "config" / "log_levels.json"
        if levels_file.exists():
            with open(levels_file, 'r', encoding='utf-8') as f:
                levels_config = json.load(f)
            self._verbose_level = levels_config.get("default_level", "normal")
            self._component_overrides = levels_config.get("component_overrides", {})
            self._file_logging = levels_config.get("file_logging", {})

        self._setup_handlers()

    def _setup_handlers(self) -> None:
        from ..formatters.json_formatter import JSONFormatter
        from ..formatters.console_formatter import ConsoleFormatter
        from ..handlers.file_handler import FileHandler
        from ..handlers.console_handler import ConsoleHandler

        root = logging.getLogger(ROOT_LOGGER_NAME)
        root.setLevel(LEVEL_MAPPING.get(self._verbose_level, logging.INFO))

        console_handler = ConsoleHandler()
        console_handler.setFormatter(ConsoleFormatter(use_colors=console_handler.supports_color))
        console_handler.setLevel(logging.DEBUG)
        root.addHandler(console_handler)

        if self._file_logging.get("enabled"):
            filename = generate_log_filename(self._file_logging.get("base_name", "logbeacon"))
            file_handler = FileHandler(
                filename,
                maxBytes=self._file_logging.get("max_bytes", 10485760),
                backupCount=self._file_logging.get("backup_count", 5)
            )
            file_handler.setFormatter(JSONFormatter())
            file_handler.setLevel(logging.DEBUG)
            root.addHandler(file_handler)

    def set_verbose_level(self, level: str) -> None:
        """
        Set the global verbose level.

        Args:
            level: Verbose level ('minimal', 'normal', 'verbose', 'debug')
        """
        if level not in LEVEL_MAPPING:
            raise ValueError(f"Invalid verbose level: {level}. Must be one of {list(LEVEL_MAPPING)}")

        self._verbose_level = level
        logging.getLogger(ROOT_LOGGER_NAME).setLevel(LEVEL_MAPPING[level])
        for logger_name, logger in self._loggers.items():
            self._apply_verbose_level(logger, logger_name)

    def get_verbose_level(self) -> str:
        return self._verbose_level

    def set_component_override(self, component: str, level: str) -> None:
        """
        Set verbose level override for a specific component.

        Args:
            component: Logger name (e.g., 'logbeacon.transport')
            level: Verbose level for this component
        """
        self._component_overrides[component] = level
        if component in self._loggers:
            self._apply_verbose_level(self._loggers[component], component)

    def get_logger(self, name: str) -> logging.Logger:
        """
        Get or create a logger with the specified name.

        Args:
            name: Logger name, normally under ``logbeacon.``

        Returns:
            Configured logger instance
        """
        if name not in self._loggers:
            logger = logging.getLogger(name)
            self._loggers[name] = logger
            self._apply_verbose_level(logger, name)

        return self._loggers[name]

    def _apply_verbose_level(self, logger: logging.Logger, name: str) -> None:
        level = self._component_overrides.get(name, self._verbose_level)
        logger.setLevel(LEVEL_MAPPING.get(level, logging.INFO))

    def shutdown(self) -> None:
        """Close the logbeacon handlers and forget managed loggers."""
        root = logging.getLogger(ROOT_LOGGER_NAME)
        for handler in root.handlers[:]:
            handler.close()
            root.removeHandler(handler)
        self._loggers.clear()
