"""Rotating JSON-lines log file."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Union

from ..formatters import JsonFormatter, HumanFormatter


class FileHandler(RotatingFileHandler):
    """Rotating file handler that creates its directory and writes JSON lines.

    Plain text output reuses the console layout without colors, so a text log
    reads the same as the terminal.
    """

    def __init__(self,
                 filename: Union[str, Path],
                 max_bytes: int = 10 * 1024 * 1024,
                 backup_count: int = 3,
                 use_json: bool = True):
        log_path = Path(filename)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        super().__init__(str(log_path), maxBytes=max_bytes, backupCount=backup_count, encoding='utf-8')

        self.setFormatter(JsonFormatter() if use_json else HumanFormatter(use_colors=False))
        self.setLevel(logging.DEBUG)

    @classmethod
    def from_config(cls, config, filename: Union[str, Path, None] = None) -> 'FileHandler':
        """Build a handler from the ``logging.*`` settings of a Config."""
        if filename is None:
            filename = config.get('logging.file') or Path(config.get('paths.logs_dir', 'logs')) / 'dggs.log'
        return cls(
            filename,
            max_bytes=config.get('logging.max_file_size', 10 * 1024 * 1024),
            backup_count=config.get('logging.backup_count', 3),
            use_json=config.get('logging.file_format', 'json') == 'json'
        )

    @property
    def path(self) -> Path:
        return Path(self.baseFilename)
