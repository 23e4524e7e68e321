"""
Base check and signal interfaces.

A check is a class wrapping one kind of inspection (binary probing, property
matching, ...). A signal is a named, immutable binding of one check
operation to a failure policy; the engine only ever sees signals.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Optional
import logging

from rootcheck_core.logic.models import DetectionConfig, FailurePolicy, SignalResult
from rootcheck_core.infrastructure.device import HostEnvironment
from rootcheck_core.infrastructure.logging import EvidenceSink, NullEvidenceSink


@dataclass(frozen=True)
class DetectionSignal:
    """
    A named check with a fixed failure policy.

    `check` may raise when its leaf dependency fails; the engine converts
    that into `failure_policy.fallback`. Identity is the name.
    """
    name: str
    check: Callable[[], SignalResult]
    failure_policy: FailurePolicy = FailurePolicy.FAIL_OPEN
    description: str = ""

    def __eq__(self, other):
        if not isinstance(other, DetectionSignal):
            return NotImplemented
        return self.name == other.name

    def __hash__(self):
        return hash(self.name)


class BaseCheck(ABC):
    """
    Base class for all check implementations.

    Provides the host, configuration, evidence sink and a per-check logger.
    Checks hold no mutable state between calls.
    """

    def __init__(self, host: HostEnvironment,
                 config: Optional[DetectionConfig] = None,
                 sink: Optional[EvidenceSink] = None):
        self.host = host
        self.config = config or DetectionConfig()
        self.sink = sink or NullEvidenceSink()
        self.logger = logging.getLogger(f"signal.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the name of this check."""
        pass

    @property
    def description(self) -> str:
        return f"Check: {self.name}"

    def emit(self, message: str, level: int = logging.INFO, signal: Optional[str] = None) -> None:
        """Send a piece of evidence to the sink."""
        self.sink.emit(signal or self.name, message, level)
