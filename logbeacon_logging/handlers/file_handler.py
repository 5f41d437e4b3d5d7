"""
File Handler Module

Rotating file handler that creates its log directory on demand.
"""

import logging.handlers
from pathlib import Path
from typing import List, Optional


class FileHandler(logging.handlers.RotatingFileHandler):
    """
    RotatingFileHandler that makes sure the parent directory exists.
    """

    def __init__(
        self,
        filename: str,
        mode: str = 'a',
        maxBytes: int = 0,
        backupCount: int = 0,
        encoding: Optional[str] = 'utf-8',
        delay: bool = True
    ):
        """
        Args:
            filename: Log file path
            mode: File mode
            maxBytes: Size that triggers rotation (0 = never)
            backupCount: Number of rotated files to keep
            encoding: File encoding
            delay: Open the file on first emit
        """
        log_path = Path(filename)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        super().__init__(
            filename=str(log_path),
            mode=mode,
            maxBytes=maxBytes,
            backupCount=backupCount,
            encoding=encoding,
            delay=delay
        )

    @property
    def current_file_size(self) -> int:
        try:
            return Path(self.baseFilename).stat().st_size
        except OSError:
            return 0

    @property
    def backup_files(self) -> List[str]:
        """Paths of rotated files that currently exist."""
        base_path = Path(self.baseFilename)
        return [
            str(base_path.parent / f"{base_path.name}.{i}")
            for i in range(1, self.backupCount + 1)
            if (base_path.parent / f"{base_path.name}.{i}").exists()
        ]
