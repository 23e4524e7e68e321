"""
Process-wide logging setup for the command line.

Console output goes to stderr so stdout only ever carries the JSON verdict.
An optional log file records everything at DEBUG, including the evidence
trail of every signal that ran.
"""

import atexit
import logging
import platform
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class EnhancedLogger:
    """Installs console and file handlers on the root logger and undoes it at exit."""

    def __init__(self):
        self.log_file_path: Optional[Path] = None
        self._installed: List[logging.Handler] = []
        self._replaced: List[logging.Handler] = []
        self._replaced_level: Optional[int] = None

        atexit.register(self.cleanup)

    def _install(self, handler: logging.Handler, level: int) -> None:
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        handler.setLevel(level)
        logging.getLogger().addHandler(handler)
        self._installed.append(handler)

    def setup_logging(self, verbose: bool = False, log_file: Optional[str] = None) -> Optional[str]:
        """
        Replace the root logger's handlers.

        Args:
            verbose: INFO on the console instead of WARNING
            log_file: Also write a DEBUG log to this path

        Returns:
            The log file path, if one was opened
        """
        self.cleanup()

        root = logging.getLogger()
        self._replaced = root.handlers[:]
        self._replaced_level = root.level
        root.handlers.clear()
        root.setLevel(logging.DEBUG if log_file else logging.INFO)

        self._install(logging.StreamHandler(sys.stderr), logging.INFO if verbose else logging.WARNING)

        if log_file:
            self.log_file_path = Path(log_file)
            self.log_file_path.parent.mkdir(parents=True, exist_ok=True)
            self._install(logging.FileHandler(self.log_file_path, mode='w', encoding='utf-8'), logging.DEBUG)
            logging.getLogger("enhanced.logging").info(f"Log file: {self.log_file_path}")

        return str(self.log_file_path) if self.log_file_path else None

    def log_system_info(self, target: str):
        """Record where and against what a verdict was computed."""
        logger = logging.getLogger("system.info")
        logger.info(f"rootcheck on {platform.platform()} (Python {platform.python_version()})")
        logger.info(f"Target: {target}, started {datetime.now().isoformat()}")

    def cleanup(self):
        """Close installed handlers and put the previous ones back."""
        root = logging.getLogger()

        for handler in self._installed:
            root.removeHandler(handler)
            handler.close()
        self._installed.clear()

        if self._replaced_level is not None:
            for handler in self._replaced:
                root.addHandler(handler)
            root.setLevel(self._replaced_level)
            self._replaced.clear()
            self._replaced_level = None


# Global instance for use throughout the application
enhanced_logger = EnhancedLogger()
