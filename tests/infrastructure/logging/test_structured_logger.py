"""Tests for structured logging functionality."""

import io
import json
import logging
from unittest.mock import patch

import pytest

from dggs.infrastructure.logging import (
    StructuredLogger, get_logger, grid_context, operation_context
)
from dggs.infrastructure.logging.formatters import JsonFormatter, HumanFormatter
from dggs.infrastructure.logging.handlers import ConsoleHandler, FileHandler


@pytest.fixture
def debug_logger():
    """A structured logger that passes every level."""
    logger = get_logger("tests.structured")
    logger.setLevel(logging.DEBUG)
    yield logger
    logger.clear_context()
    logger.setLevel(logging.NOTSET)


def make_record(logger, message="Test message", **kwargs):
    """Capture the record a logger would emit."""
    records = []

    class Collector(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Collector()
    logger.addHandler(handler)
    try:
        logger.info(message, **kwargs)
    finally:
        logger.removeHandler(handler)
    return records[0]


class TestStructuredLogger:
    """Test structured logging functionality."""

    def test_logger_creation(self):
        """Test that get_logger creates StructuredLogger instances."""
        logger = get_logger("tests.module")

        assert isinstance(logger, StructuredLogger)
        assert logger.name == "tests.module"
        assert get_logger("tests.module") is logger

    def test_other_loggers_unaffected(self):
        """Only get_logger creates structured loggers."""
        get_logger("tests.structured_only")
        assert not isinstance(logging.getLogger("tests.plain_logger"), StructuredLogger)

    def test_context_variables(self):
        """Test context variable setting and retrieval."""
        assert grid_context.get() is None
        token = grid_context.set("ISEA3H_3")
        assert grid_context.get() == "ISEA3H_3"
        grid_context.reset(token)
        assert grid_context.get() is None

    def test_structured_log_output(self, debug_logger):
        """Test that logs include structured context."""
        grid_token = grid_context.set("ISEA3H_5")
        operation_token = operation_context.set("cells_for_bound")
        try:
            with patch.object(logging.Logger, '_log') as mock_log:
                debug_logger.info("Test message")

                assert mock_log.called
                context = mock_log.call_args.kwargs['extra']['context']
                assert context['grid'] == "ISEA3H_5"
                assert context['operation'] == "cells_for_bound"
                assert context['logger_name'] == "tests.structured"
                assert 'timestamp' in context
        finally:
            operation_context.reset(operation_token)
            grid_context.reset(grid_token)

    def test_unset_context_is_omitted(self, debug_logger):
        record = make_record(debug_logger)

        assert 'grid' not in record.context
        assert 'operation' not in record.context
        assert record.performance is None
        assert record.traceback is None

    def test_persistent_context(self, debug_logger):
        """Test add_context, remove_context and extra context."""
        debug_logger.add_context(run="r1", user="tester")
        debug_logger.remove_context("user")

        record = make_record(debug_logger, extra={'context': {'face': 7}})

        assert record.context['run'] == "r1"
        assert record.context['face'] == 7
        assert 'user' not in record.context

    def test_exception_traceback(self, debug_logger):
        """Test that exc_info becomes a formatted traceback."""
        try:
            raise ValueError("broken")
        except ValueError:
            record = make_record(debug_logger, exc_info=True)

        assert "ValueError: broken" in record.traceback
        assert record.exc_info is None

    def test_log_performance(self, debug_logger):
        """Test performance logging."""
        with patch.object(logging.Logger, '_log') as mock_log:
            debug_logger.log_performance("cells_for_bound", 2.0, items_processed=100)

            performance = mock_log.call_args.kwargs['extra']['performance']
            assert performance['operation'] == "cells_for_bound"
            assert performance['duration_seconds'] == 2.0
            assert performance['items_processed'] == 100
            assert performance['items_per_second'] == 50.0

    def test_log_error_with_context(self, debug_logger):
        error = RuntimeError("face not found")
        record = None
        with patch.object(logging.Logger, '_log') as mock_log:
            debug_logger.log_error_with_context(error, operation="lookup", face=3)
            record = mock_log.call_args

        context = record.kwargs['extra']['context']
        assert record.args[0] == logging.ERROR
        assert context['error_type'] == 'RuntimeError'
        assert context['operation'] == 'lookup'
        assert context['face'] == 3


class TestFormatters:
    """Test JSON and human-readable output."""

    def test_json_formatter(self, debug_logger):
        grid_token = grid_context.set("ISEA3H_2")
        try:
            record = make_record(debug_logger, extra={'performance': {'duration_seconds': 0.5}})
        finally:
            grid_context.reset(grid_token)

        data = json.loads(JsonFormatter().format(record))
        assert data['message'] == "Test message"
        assert data['level'] == 'INFO'
        assert data['logger'] == "tests.structured"
        assert data['context']['grid'] == "ISEA3H_2"
        assert data['performance'] == {'duration_seconds': 0.5}

    def test_human_formatter(self, debug_logger):
        grid_token = grid_context.set("ISEA3H_2")
        operation_token = operation_context.set("cells_for_region")
        try:
            record = make_record(debug_logger, extra={'context': {'face': 4},
                                                      'performance': {'duration_seconds': 1.25,
                                                                      'items_processed': 10}})
        finally:
            operation_context.reset(operation_token)
            grid_context.reset(grid_token)

        output = HumanFormatter(use_colors=False).format(record)
        assert "[grid:ISEA3H_2 | op:cells_for_region | face:4]" in output
        assert "Test message" in output
        assert "Performance: 1.250s | 10 cells" in output
        assert '\033[' not in output

    def test_human_formatter_without_context(self, debug_logger):
        record = make_record(debug_logger)
        output = HumanFormatter(use_colors=False, show_context=False).format(record)

        assert '[grid:' not in output

    def test_shorten_logger_name(self):
        formatter = HumanFormatter(use_colors=False)

        assert formatter._shorten_logger_name("dggs.cli") == "dggs.cli"
        assert formatter._shorten_logger_name("dggs.grid_systems.isea3h_grid") == "...isea3h_grid"


class TestHandlers:
    """Test console and file handlers."""

    def test_console_handler(self, debug_logger):
        stream = io.StringIO()
        handler = ConsoleHandler(stream=stream)
        debug_logger.addHandler(handler)
        try:
            debug_logger.info("to the console")
        finally:
            debug_logger.removeHandler(handler)

        assert "to the console" in stream.getvalue()
        assert '\033[' not in stream.getvalue()

    def test_file_handler_creates_directory(self, debug_logger, test_data_dir):
        log_file = test_data_dir / 'nested' / 'dir' / 'grid.log'
        handler = FileHandler(str(log_file))
        debug_logger.addHandler(handler)
        try:
            debug_logger.info("to the file")
        finally:
            debug_logger.removeHandler(handler)
            handler.close()

        lines = log_file.read_text().strip().splitlines()
        assert json.loads(lines[-1])['message'] == "to the file"

    def test_file_handler_text_format_from_config(self, debug_logger, test_data_dir):
        log_file = test_data_dir / 'text' / 'grid.log'
        settings = {
            'logging.file': str(log_file),
            'logging.file_format': 'text',
            'logging.backup_count': 1,
        }

        class StubConfig:
            def get(self, key, default=None):
                return settings.get(key, default)

        handler = FileHandler.from_config(StubConfig())
        debug_logger.addHandler(handler)
        try:
            debug_logger.warning("plain line")
        finally:
            debug_logger.removeHandler(handler)
            handler.close()

        assert handler.path == log_file
        assert handler.backupCount == 1
        line = log_file.read_text().strip().splitlines()[-1]
        assert line.endswith("plain line")
        assert "WARNING" in line
        assert '\033[' not in line
