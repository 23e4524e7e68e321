"""
Signal registry.

Holds the signals an engine can evaluate, in registration order, and
resolves the ordered subsets each verdict entry point uses.
"""

from typing import Dict, List, Optional, Sequence
import logging

from .base_signal import DetectionSignal


class SignalRegistry:
    """Ordered, name-keyed collection of detection signals."""

    def __init__(self, signals: Sequence[DetectionSignal] = ()):
        self._signals: Dict[str, DetectionSignal] = {}
        self.logger = logging.getLogger("signal.registry")

        for signal in signals:
            self.register(signal)

    def register(self, signal: DetectionSignal) -> None:
        """
        Register a signal.

        Raises:
            ValueError: a signal with this name is already registered
        """
        if not isinstance(signal, DetectionSignal):
            raise ValueError(f"{signal!r} is not a DetectionSignal")

        if signal.name in self._signals:
            raise ValueError(f"Signal {signal.name} is already registered")

        self._signals[signal.name] = signal
        self.logger.debug(f"Registered signal: {signal.name} ({signal.failure_policy.value})")

    def get(self, name: str) -> Optional[DetectionSignal]:
        return self._signals.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self._signals

    def __len__(self) -> int:
        return len(self._signals)

    def get_available_signals(self) -> List[str]:
        """Signal names in registration order."""
        return list(self._signals.keys())

    def resolve(self, names: Sequence[str]) -> List[DetectionSignal]:
        """
        Resolve an ordered list of signal names.

        Raises:
            KeyError: a name is not registered
        """
        missing = [name for name in names if name not in self._signals]
        if missing:
            raise KeyError(f"Unknown signals: {', '.join(missing)}")
        return [self._signals[name] for name in names]
