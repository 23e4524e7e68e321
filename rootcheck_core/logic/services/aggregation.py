"""
Aggregation strategies.

Each strategy receives the ordered signal list and a function that runs one
signal (always returning a SignalOutcome, never raising) and decides how
many of them to run. The verdict is always the logical OR of the outcomes
that were produced.
"""

import concurrent.futures
from abc import ABC, abstractmethod
from typing import Callable, List, Sequence, Tuple

from rootcheck_core.logic.models import SignalOutcome, OutcomeSource
from rootcheck_core.heuristics.base import DetectionSignal
from rootcheck_core.infrastructure.shared import report_error, ErrorSeverity


RunSignal = Callable[[DetectionSignal], SignalOutcome]


class AggregationStrategy(ABC):
    """Decides which signals run and in what order."""

    name = "abstract"

    @abstractmethod
    def evaluate(self, signals: Sequence[DetectionSignal],
                 run_signal: RunSignal) -> Tuple[List[SignalOutcome], List[str]]:
        """
        Returns:
            Outcomes of the signals that ran, and names of those skipped
        """
        pass


class ShortCircuitOr(AggregationStrategy):
    """
    Stops at the first positive signal.

    Signals after it are neither run nor logged, so the evidence trail
    depends on the order of the list.
    """

    name = "short_circuit"

    def evaluate(self, signals, run_signal):
        outcomes = []
        for index, signal in enumerate(signals):
            outcome = run_signal(signal)
            outcomes.append(outcome)
            if outcome.positive:
                return outcomes, [skipped.name for skipped in signals[index + 1:]]
        return outcomes, []


class ExhaustiveOr(AggregationStrategy):
    """Runs and logs every signal before combining them."""

    name = "exhaustive"

    def evaluate(self, signals, run_signal):
        return [run_signal(signal) for signal in signals], []


class ConcurrentOr(AggregationStrategy):
    """
    Runs every signal on a thread pool and joins.

    Evidence may be logged in any order. A signal still running when the
    timeout expires contributes its failure policy's fallback, so a late
    fail-closed signal still counts as root. Its thread is left to finish
    in the background.
    """

    name = "concurrent"

    def __init__(self, max_workers: int = 4, timeout_seconds: float = 30.0):
        self.max_workers = max_workers
        self.timeout_seconds = timeout_seconds

    def _expired(self, signal: DetectionSignal) -> SignalOutcome:
        message = f"did not finish within {self.timeout_seconds}s"
        fallback = signal.failure_policy.fallback
        report_error(TimeoutError(message), operation="concurrent_join", component=signal.name,
                     severity=ErrorSeverity.WARNING,
                     failure_policy=signal.failure_policy.value, fallback=fallback)
        return SignalOutcome(
            name=signal.name,
            positive=fallback,
            failure_policy=signal.failure_policy,
            source=OutcomeSource.TIMEOUT,
            error=f"timed out: {message}",
            execution_time=self.timeout_seconds,
        )

    def evaluate(self, signals, run_signal):
        executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.max_workers)
        try:
            future_to_signal = {executor.submit(run_signal, signal): signal for signal in signals}
            done, not_done = concurrent.futures.wait(future_to_signal, timeout=self.timeout_seconds)

            by_name = {}
            for future in done:
                by_name[future_to_signal[future].name] = future.result()

            for future in not_done:
                signal = future_to_signal[future]
                future.cancel()
                by_name[signal.name] = self._expired(signal)
        finally:
            executor.shutdown(wait=False, cancel_futures=True)

        # Report in list order regardless of completion order
        return [by_name[signal.name] for signal in signals], []


def create_strategy(mode: str, max_workers: int = 4, timeout_seconds: float = 30.0) -> AggregationStrategy:
    """Build a strategy from its configured name."""
    if mode == ShortCircuitOr.name:
        return ShortCircuitOr()
    if mode == ExhaustiveOr.name:
        return ExhaustiveOr()
    if mode == ConcurrentOr.name:
        return ConcurrentOr(max_workers=max_workers, timeout_seconds=timeout_seconds)
    raise ValueError(f"Unknown aggregation mode: {mode}")

