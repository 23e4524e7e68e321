"""
Base check interfaces and the signal registry.

This module provides the foundation for all check implementations.
"""

from .base_signal import BaseCheck, DetectionSignal
from .signal_registry import SignalRegistry

__all__ = [
    'BaseCheck',
    'DetectionSignal',
    'SignalRegistry',
]
