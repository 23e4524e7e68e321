"""
Detection engine.

Runs signals through an aggregation strategy and turns every failure into a
boolean according to the signal's failure policy. Nothing raised by a check
ever reaches the caller of a verdict.
"""

import logging
import time
from typing import Optional, Sequence

from rootcheck_core.logic.models import SignalOutcome, OutcomeSource, VerdictReport
from rootcheck_core.heuristics.base import DetectionSignal, SignalRegistry
from rootcheck_core.infrastructure.logging import EvidenceSink, NullEvidenceSink
from rootcheck_core.infrastructure.shared import report_error, ErrorSeverity
from .aggregation import AggregationStrategy, ShortCircuitOr


class DetectionEngine:
    """
    Aggregator over a registry of signals.

    The engine owns the combination policy only; which signals make up a
    verdict is decided by the caller passing an ordered list of names.
    """

    def __init__(self, registry: SignalRegistry,
                 strategy: Optional[AggregationStrategy] = None,
                 sink: Optional[EvidenceSink] = None):
        self.registry = registry
        self.strategy = strategy or ShortCircuitOr()
        self.sink = sink or NullEvidenceSink()
        self.logger = logging.getLogger("detection.engine")

    def run_signal(self, signal: DetectionSignal) -> SignalOutcome:
        """
        Run one signal. Never raises.

        A check that raises contributes its failure policy's fallback:
        False for FAIL_OPEN, True for FAIL_CLOSED.
        """
        start_time = time.time()

        try:
            result = signal.check()
        except Exception as e:
            fallback = signal.failure_policy.fallback
            report_error(e, operation="run_signal", component=signal.name,
                         severity=ErrorSeverity.WARNING,
                         failure_policy=signal.failure_policy.value, fallback=fallback)
            if fallback:
                self.sink.emit(signal.name, f"{signal.name} could not be evaluated, assuming root: {e}",
                               logging.WARNING)
            return SignalOutcome(
                name=signal.name,
                positive=fallback,
                failure_policy=signal.failure_policy,
                source=OutcomeSource.FAILURE_POLICY,
                error=f"{type(e).__name__}: {e}",
                execution_time=time.time() - start_time,
            )

        return SignalOutcome(
            name=signal.name,
            positive=result.positive,
            failure_policy=signal.failure_policy,
            evidence=list(result.evidence),
            execution_time=time.time() - start_time,
        )

    def evaluate_signal(self, name: str) -> SignalOutcome:
        """Run a single registered signal by name."""
        return self.run_signal(self.registry.resolve([name])[0])

    def evaluate(self, names: Sequence[str], strategy: Optional[AggregationStrategy] = None) -> VerdictReport:
        """
        Combine the named signals into a verdict.

        Args:
            names: Signal names in evaluation order
            strategy: Overrides the engine's strategy for this call

        Returns:
            Verdict report; `rooted` is the OR of every outcome produced
        """
        strategy = strategy or self.strategy
        signals = self.registry.resolve(names)

        start_time = time.time()
        outcomes, skipped = strategy.evaluate(signals, self.run_signal)
        rooted = any(outcome.positive for outcome in outcomes)

        report = VerdictReport(
            rooted=rooted,
            mode=strategy.name,
            outcomes=outcomes,
            skipped=skipped,
            execution_time=time.time() - start_time,
        )

        self.logger.info(
            f"Verdict: {'ROOTED' if rooted else 'not rooted'} "
            f"({strategy.name}, {len(outcomes)} run, {len(skipped)} skipped, "
            f"positive: {', '.join(report.positive_signals) or 'none'})"
        )
        return report

    def is_rooted(self, names: Sequence[str]) -> bool:
        return self.evaluate(names).rooted
