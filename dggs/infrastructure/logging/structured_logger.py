"""Structured logging with grid context propagation."""

import logging
import sys
import traceback
from typing import Dict, Any, Optional
from contextvars import ContextVar
from datetime import datetime, timezone

# Context of the grid operation currently running in this thread/task
grid_context: ContextVar[Optional[str]] = ContextVar('grid', default=None)
operation_context: ContextVar[Optional[str]] = ContextVar('operation', default=None)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


class StructuredLogger(logging.Logger):
    """Logger that attaches context, performance data and tracebacks to records.

    Every record carries three extra attributes:
    - ``context``: grid and operation from the context variables, persistent
      fields added with ``add_context`` and fields passed via ``extra={'context': ...}``
    - ``performance``: timing data passed via ``extra={'performance': ...}``
    - ``traceback``: formatted traceback when ``exc_info`` is given
    """

    def __init__(self, name: str):
        super().__init__(name)
        self._context_fields: Dict[str, Any] = {}

    def _log(self, level, msg, args, exc_info=None, extra=None, stack_info=False, **kwargs):
        context = {
            'grid': grid_context.get(),
            'operation': operation_context.get(),
            'logger_name': self.name,
            'timestamp': _utc_timestamp(),
            **self._context_fields
        }
        context = {k: v for k, v in context.items() if v is not None}

        extra = dict(extra) if extra else {}
        performance = extra.pop('performance', None)
        context.update(extra.pop('context', {}) or {})
        traceback_str = extra.pop('traceback', None)

        if not traceback_str and exc_info:
            if isinstance(exc_info, bool):
                exc_info = sys.exc_info()
            elif isinstance(exc_info, BaseException):
                exc_info = (type(exc_info), exc_info, exc_info.__traceback__)
            if exc_info[0] is not None:
                traceback_str = ''.join(traceback.format_exception(*exc_info))

        extra.update({
            'context': context,
            'performance': performance,
            'traceback': traceback_str
        })
        super()._log(level, msg, args, exc_info=None, extra=extra,
                     stack_info=stack_info, **kwargs)

    def add_context(self, **fields):
        """Add persistent context fields to all future log messages."""
        self._context_fields.update(fields)

    def remove_context(self, *keys):
        for key in keys:
            self._context_fields.pop(key, None)

    def clear_context(self):
        self._context_fields.clear()

    def log_performance(self, operation: str, duration: float, **metrics):
        """Log performance metrics for an operation.

        Args:
            operation: Operation name
            duration: Duration in seconds
            **metrics: Additional metrics (cells, faces_searched, ...)

        Example:
            logger.log_performance('cells_for_bound', 0.42, items_processed=272)
        """
        performance_data = {
            'operation': operation,
            'duration_seconds': round(duration, 3),
            **metrics
        }
        if 'items_processed' in metrics and duration > 0:
            performance_data['items_per_second'] = round(metrics['items_processed'] / duration, 2)

        self.info(
            f"Performance: {operation} completed in {duration:.3f}s",
            extra={'performance': performance_data}
        )

    def log_error_with_context(self, error: Exception, operation: Optional[str] = None, **context):
        """Log an error with its type, the operation and a traceback."""
        error_context = {
            'error_type': type(error).__name__,
            'error_module': type(error).__module__,
            **context
        }
        if operation:
            error_context['operation'] = operation

        self.error(
            f"{type(error).__name__}: {error}",
            exc_info=error,
            extra={'context': error_context}
        )


_logger_cache: Dict[str, StructuredLogger] = {}


def get_logger(name: str) -> StructuredLogger:
    """Get or create a structured logger instance.

    Args:
        name: Logger name (usually __name__)

    Returns:
        StructuredLogger instance

    Example:
        from dggs.infrastructure.logging import get_logger
        logger = get_logger(__name__)
    """
    if name in _logger_cache:
        return _logger_cache[name]

    original_class = logging.getLoggerClass()
    logging.setLoggerClass(StructuredLogger)
    try:
        logger = logging.getLogger(name)
        _logger_cache[name] = logger
        return logger
    finally:
        logging.setLoggerClass(original_class)
