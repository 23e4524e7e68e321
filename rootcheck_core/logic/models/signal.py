"""
Signal domain models.

A signal is one independent heuristic. Its result is produced fresh on
every call; the environment can change between calls, so nothing here is
ever cached.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Dict, Any


class FailurePolicy(Enum):
    """What a signal contributes when its leaf dependency fails."""
    FAIL_OPEN = "fail_open"      # failure means no evidence of root
    FAIL_CLOSED = "fail_closed"  # failure means assume root

    @property
    def fallback(self) -> bool:
        return self is FailurePolicy.FAIL_CLOSED


@dataclass
class SignalResult:
    """Outcome of a single check."""
    positive: bool
    evidence: List[str] = field(default_factory=list)

    @classmethod
    def negative(cls, *evidence: str) -> 'SignalResult':
        return cls(positive=False, evidence=list(evidence))

    @classmethod
    def from_evidence(cls, evidence: List[str]) -> 'SignalResult':
        """Positive iff at least one hit was recorded."""
        return cls(positive=bool(evidence), evidence=list(evidence))


class OutcomeSource(Enum):
    """Where a signal's boolean came from."""
    CHECK = "check"              # the check ran to completion
    FAILURE_POLICY = "failure"   # a leaf failure was converted by the policy
    TIMEOUT = "timeout"          # the check did not finish in time


@dataclass
class SignalOutcome:
    """A signal's result as recorded by the engine for one verdict."""
    name: str
    positive: bool
    failure_policy: FailurePolicy
    source: OutcomeSource = OutcomeSource.CHECK
    evidence: List[str] = field(default_factory=list)
    error: Optional[str] = None
    execution_time: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'positive': self.positive,
            'failurePolicy': self.failure_policy.value,
            'source': self.source.value,
            'evidence': list(self.evidence),
            'error': self.error,
            'executionTime': round(self.execution_time, 4),
        }
