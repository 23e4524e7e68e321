"""
Domain services: signal aggregation and the detection engine.
"""

from .aggregation import (
    AggregationStrategy,
    ShortCircuitOr,
    ExhaustiveOr,
    ConcurrentOr,
    create_strategy,
)
from .detection_engine import DetectionEngine

__all__ = [
    'AggregationStrategy',
    'ShortCircuitOr',
    'ExhaustiveOr',
    'ConcurrentOr',
    'create_strategy',
    'DetectionEngine',
]
