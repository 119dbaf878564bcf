"""Setup and configuration for the structured logging system."""

import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any, Union

from .structured_logger import get_logger
from .handlers import ConsoleHandler, FileHandler


def setup_logging(config,
                  log_file: Optional[Union[str, Path]] = None,
                  console: bool = True,
                  file: bool = True,
                  log_level: Optional[str] = None):
    """Configure the root logger with console and rotating JSON file output.

    Args:
        config: Config instance (anything with a dot-notation ``get``)
        log_file: Log file path (defaults to ``logging.file`` from config)
        console: Whether to enable console logging
        file: Whether to enable file logging
        log_level: Minimum log level (defaults to ``logging.level`` from config)
    """
    log_level = log_level or config.get('logging.level', 'INFO')
    level = getattr(logging, str(log_level).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if console:
        console_handler = ConsoleHandler(use_colors=sys.stderr.isatty(), show_context=True)
        console_handler.setLevel(level)
        root_logger.addHandler(console_handler)

    if file:
        file_handler = FileHandler.from_config(config, log_file)
        log_file = file_handler.path
        # files capture everything
        file_handler.setLevel(logging.DEBUG)
        root_logger.setLevel(logging.DEBUG)
        root_logger.addHandler(file_handler)

    logger = get_logger(__name__)
    logger.info(
        "Structured logging system initialized",
        extra={
            'context': {
                'log_level': log_level,
                'handlers': {
                    'console': console,
                    'file': str(log_file) if file else None
                }
            }
        }
    )


def setup_simple_logging(log_level: str = 'INFO'):
    """Console-only logging for the command line and for debugging.

    Args:
        log_level: Minimum log level
    """
    root_logger = logging.getLogger()
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger.setLevel(level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = ConsoleHandler(show_context=True)
    console_handler.setLevel(level)
    root_logger.addHandler(console_handler)


def get_log_stats() -> Dict[str, Any]:
    """Describe the handlers attached to the root logger."""
    stats = {}
    for handler in logging.getLogger().handlers:
        if isinstance(handler, FileHandler):
            stats['file'] = {
                'filename': str(handler.path),
                'max_bytes': handler.maxBytes,
                'backup_count': handler.backupCount
            }
        elif isinstance(handler, ConsoleHandler):
            stats['console'] = {'level': logging.getLevelName(handler.level)}
    return stats
