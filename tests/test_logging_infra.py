"""Tests for the internal logging package."""

import json
import logging

import pytest

from logbeacon_logging.core.error_enhancer import ErrorEnhancer
from logbeacon_logging.core.logger_factory import LoggerFactory
from logbeacon_logging.core.performance_tracker import PerformanceTracker
from logbeacon_logging.formatters.console_formatter import ConsoleFormatter
from logbeacon_logging.formatters.json_formatter import JSONFormatter
from logbeacon_logging.handlers.file_handler import FileHandler


def _make_record(**extra):
    logger = logging.getLogger("logbeacon.tests.format")
    return logger.makeRecord(logger.name, logging.WARNING, __file__, 10, "disk at %d%%", (91,), None, extra=extra)


def test_package_exports_public_names():
    import logbeacon_logging

    for name in logbeacon_logging.__all__:
        assert hasattr(logbeacon_logging, name), name
    assert logbeacon_logging.LoggerFactory is LoggerFactory
    assert logbeacon_logging.PerformanceTracker is PerformanceTracker
    assert logbeacon_logging.ErrorEnhancer is ErrorEnhancer


class TestLoggerFactory:
    def test_is_singleton(self):
        assert LoggerFactory() is LoggerFactory()

    def test_get_logger_is_cached(self):
        factory = LoggerFactory()
        assert factory.get_logger("logbeacon.tests.a") is factory.get_logger("logbeacon.tests.a")

    def test_invalid_verbose_level(self):
        with pytest.raises(ValueError):
            LoggerFactory().set_verbose_level("loud")

    def test_verbose_level_round_trips(self):
        factory = LoggerFactory()
        previous = factory.get_verbose_level()
        try:
            factory.set_verbose_level("verbose")
            assert factory.get_verbose_level() == "verbose"
            assert logging.getLogger("logbeacon").level == logging.DEBUG
        finally:
            factory.set_verbose_level(previous)

    def test_component_override(self):
        factory = LoggerFactory()
        logger = factory.get_logger("logbeacon.tests.override")
        factory.set_component_override("logbeacon.tests.override", "minimal")
        assert logger.level == logging.ERROR

    def test_configured_override_from_json(self):
        logger = LoggerFactory().get_logger("logbeacon.tools.stack_trace")
        assert logger.level == logging.DEBUG


class TestFormatters:
    def test_json_formatter_includes_extra(self):
        line = JSONFormatter().format(_make_record(fields={"userId": "u-1"}))
        entry = json.loads(line)
        assert entry["level"] == "WARNING"
        assert entry["message"] == "disk at 91%"
        assert entry["extra"] == {"fields": {"userId": "u-1"}}

    def test_console_formatter_plain(self):
        formatted = ConsoleFormatter(use_colors=False, show_timestamp=False).format(_make_record(endpoint="x"))
        assert formatted == "[WARNING] [tests.format] disk at 91% endpoint=x"


class TestErrorEnhancer:
    def test_logs_context_and_trace(self, caplog):
        logger = logging.getLogger("logbeacon.tests.enhancer")
        try:
            raise ConnectionError("socket closed")
        except ConnectionError as e:
            with caplog.at_level(logging.ERROR, logger=logger.name):
                ErrorEnhancer.log_error(logger, e, context={"operation": "ship"})

        [entry] = caplog.records
        message = entry.getMessage()
        assert message.startswith("Error: ConnectionError: socket closed")
        assert "Context: operation='ship'" in message
        assert "Stack Trace:" in message
        assert entry.error_type == "ConnectionError"

    def test_unprintable_error_is_still_logged(self, caplog):
        class Unprintable(Exception):
            def __str__(self):
                raise RuntimeError("cannot render")

        logger = logging.getLogger("logbeacon.tests.enhancer")
        with caplog.at_level(logging.ERROR, logger=logger.name):
            ErrorEnhancer.log_error(logger, Unprintable(), include_stack_trace=False)

        [entry] = caplog.records
        assert entry.getMessage() == "Error: Unprintable: <unprintable Unprintable>"


class TestPerformanceTracker:
    def test_measures_duration(self):
        with PerformanceTracker("op", logging.getLogger("logbeacon.tests.perf")) as tracker:
            tracker.add_metadata("frames", 3)
        assert tracker.get_duration() is not None
        assert tracker.elapsed_ms >= 0


def test_file_handler_creates_directory(tmp_path):
    target = tmp_path / "nested" / "logbeacon.log"
    handler = FileHandler(str(target), maxBytes=1024, backupCount=2)
    try:
        handler.emit(_make_record())
        assert target.exists()
        assert handler.current_file_size > 0
        assert handler.backup_files == []
    finally:
        handler.close()
