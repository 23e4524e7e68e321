"""
Evidence sinks.

Checks report what they found ("/system/xbin/su binary detected!") to a
sink handed to them at construction. Switching evidence logging on or off
means choosing a different sink, not flipping a global.
"""

import logging
from abc import ABC, abstractmethod


class EvidenceSink(ABC):
    """Destination for evidence strings."""

    @abstractmethod
    def emit(self, signal: str, message: str, level: int = logging.INFO) -> None:
        pass

    @property
    def enabled(self) -> bool:
        return True


class NullEvidenceSink(EvidenceSink):
    """Discards all evidence."""

    def emit(self, signal: str, message: str, level: int = logging.INFO) -> None:
        pass

    @property
    def enabled(self) -> bool:
        return False


class LoggingEvidenceSink(EvidenceSink):
    """Writes evidence to `evidence.<signal>` loggers."""

    def __init__(self, logger_prefix: str = "evidence"):
        self.logger_prefix = logger_prefix

    def emit(self, signal: str, message: str, level: int = logging.INFO) -> None:
        logging.getLogger(f"{self.logger_prefix}.{signal}").log(level, message)
