"""
Verdict domain model.

The contract only promises a boolean. The report is an extension for
callers that want to see which signals ran and why the verdict came out
the way it did.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Dict, Any, Optional

from .signal import SignalOutcome


@dataclass
class VerdictReport:
    """Combined verdict plus the per-signal trail that produced it."""
    rooted: bool
    mode: str
    outcomes: List[SignalOutcome] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    execution_time: float = 0.0
    created_at: Optional[datetime] = None

    def __post_init__(self):
        if not self.created_at:
            self.created_at = datetime.now()

    def __bool__(self) -> bool:
        return self.rooted

    @property
    def positive_signals(self) -> List[str]:
        return [outcome.name for outcome in self.outcomes if outcome.positive]

    def get_outcome(self, name: str) -> Optional[SignalOutcome]:
        for outcome in self.outcomes:
            if outcome.name == name:
                return outcome
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rooted': self.rooted,
            'mode': self.mode,
            'positiveSignals': self.positive_signals,
            'signals': [outcome.to_dict() for outcome in self.outcomes],
            'skipped': list(self.skipped),
            'executionTime': round(self.execution_time, 4),
            'createdAt': self.created_at.isoformat(),
        }
