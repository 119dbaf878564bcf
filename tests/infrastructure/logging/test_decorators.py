"""Tests for the operation logging decorator."""

import logging
from unittest.mock import patch

import pytest

from dggs.infrastructure.logging import StructuredLogger, log_operation, operation_context


@log_operation("sample_operation")
def current_operation():
    return operation_context.get()


@log_operation()
def three_items():
    return [1, 2, 3]


@log_operation("failing_operation")
def failing():
    raise ValueError("cannot enumerate")


@log_operation("with_args", log_args=True, log_performance=False)
def with_args(lat, lon, bounds=None):
    return lat + lon


class TestLogOperation:
    """Test log_operation decorator."""

    def test_operation_context(self):
        """The operation name is visible while the function runs."""
        assert current_operation() == "sample_operation"
        assert operation_context.get() is None

    def test_preserves_metadata(self):
        assert three_items.__name__ == "three_items"

    def test_performance_logged(self):
        """Sized results are reported as items_processed."""
        with patch.object(StructuredLogger, 'log_performance') as mock_perf:
            assert three_items() == [1, 2, 3]

        name, duration = mock_perf.call_args.args
        assert name == "three_items"
        assert duration >= 0
        assert mock_perf.call_args.kwargs == {'status': 'success', 'items_processed': 3}

    def test_failure_logged_and_raised(self, caplog):
        """Errors are logged and propagated."""
        with caplog.at_level(logging.ERROR):
            with pytest.raises(ValueError):
                failing()

        assert operation_context.get() is None
        records = [r for r in caplog.records if r.getMessage().startswith("Failed failing_operation")]
        assert records
        assert records[0].performance['status'] == 'failed'
        assert records[0].performance['error_type'] == 'ValueError'
        assert "cannot enumerate" in records[0].traceback

    def test_arguments_logged(self, caplog):
        with caplog.at_level(logging.DEBUG):
            assert with_args(1.0, 2.0, bounds=(0, 0, 1, 1)) == 3.0

        starting = [r for r in caplog.records if r.getMessage() == "Starting with_args"]
        assert starting[0].context['arguments'] == {'lat': 1.0, 'lon': 2.0, 'bounds': '<tuple>'}
        assert any(r.getMessage() == "Completed with_args" for r in caplog.records)
