"""
Domain models for root detection.

These models are independent of how the host is reached (locally or over ADB).
"""

from .configuration import DetectionConfig, AGGREGATION_MODES
from .signal import FailurePolicy, SignalResult, SignalOutcome, OutcomeSource
from .verdict import VerdictReport

__all__ = [
    'DetectionConfig',
    'AGGREGATION_MODES',
    'FailurePolicy',
    'SignalResult',
    'SignalOutcome',
    'OutcomeSource',
    'VerdictReport',
]
