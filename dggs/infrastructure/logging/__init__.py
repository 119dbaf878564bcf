"""Structured logging for grid construction and enumeration."""

from .structured_logger import StructuredLogger, get_logger, grid_context, operation_context
from .decorators import log_operation
from .setup import setup_logging, setup_simple_logging, get_log_stats

__all__ = [
    'StructuredLogger',
    'get_logger',
    'grid_context',
    'operation_context',
    'log_operation',
    'setup_logging',
    'setup_simple_logging',
    'get_log_stats'
]
