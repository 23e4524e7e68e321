"""
Public root detection API.

Gives an *indication* of whether a host is rooted. root == god, so there is
no 100% way to check for root: every answer here can be cloaked.

    detector = RootDetector(HostEnvironment.adb("emulator-5554"))
    if detector.is_rooted():
        ...
"""

import warnings
from typing import Iterable, Optional, Sequence

from rootcheck_core.logic.models import DetectionConfig, FailurePolicy, SignalResult, VerdictReport
from rootcheck_core.logic.services import DetectionEngine, AggregationStrategy, create_strategy
from rootcheck_core.heuristics import (
    CheckSet,
    DetectionSignal,
    build_signal_registry,
    DEFAULT_SIGNAL_ORDER,
    BUSYBOX_SIGNAL_ORDER,
    ROOT_MANAGEMENT_APPS,
    DANGEROUS_APPS,
    ROOT_CLOAKING_APPS,
    SU_BINARY,
    BUSYBOX_BINARY,
    MAGISK_BINARY,
    DANGEROUS_PROPS,
    RW_PATHS,
    TEST_KEYS,
    SU_EXISTS,
    ROOT_NATIVE,
)
from rootcheck_core.infrastructure.device import HostEnvironment
from rootcheck_core.infrastructure.logging import EvidenceSink, LoggingEvidenceSink, NullEvidenceSink


class RootDetector:
    """
    Verdicts and individual signals for one host.

    Every method returns a plain bool and never raises because of the host:
    leaf failures are folded in by each signal's failure policy.
    """

    def __init__(self, host: HostEnvironment,
                 config: Optional[DetectionConfig] = None,
                 sink: Optional[EvidenceSink] = None,
                 strategy: Optional[AggregationStrategy] = None):
        self.host = host
        self.config = config or DetectionConfig()
        self.strategy = strategy or create_strategy(
            self.config.aggregation,
            max_workers=self.config.max_workers,
            timeout_seconds=self.config.signal_timeout_seconds,
        )

        if sink is None:
            sink = LoggingEvidenceSink() if self.config.logging_enabled else NullEvidenceSink()
        self._configured_sink = sink
        self._build(sink)

    def _build(self, sink: EvidenceSink) -> None:
        self.sink = sink
        self.checks = CheckSet(self.host, self.config, sink)
        self.engine = DetectionEngine(build_signal_registry(self.checks), self.strategy, sink)

    def set_logging(self, enabled: bool) -> None:
        """Switch evidence logging on or off for subsequent calls."""
        self._build(self._configured_sink if enabled else NullEvidenceSink())

    # Verdicts

    def evaluate(self, include_busybox: bool = False,
                 strategy: Optional[AggregationStrategy] = None) -> VerdictReport:
        """Full verdict report for `is_rooted()` or `is_rooted_with_busybox_check()`."""
        order = BUSYBOX_SIGNAL_ORDER if include_busybox else DEFAULT_SIGNAL_ORDER
        return self.engine.evaluate(order, strategy)

    def is_rooted(self) -> bool:
        """
        Run all the root detection checks except busybox.

        Returns:
            True for a good indication of root, False for a good indication
            of no root (could still be cloaked)
        """
        return self.evaluate().rooted

    def is_rooted_with_busybox_check(self) -> bool:
        """
        All checks plus the busybox binary. Busybox alone is a weak signal:
        many manufacturers leave it on production devices.
        """
        return self.evaluate(include_busybox=True).rooted

    def is_rooted_without_busybox_check(self) -> bool:
        warnings.warn(
            "is_rooted_without_busybox_check() is deprecated, checking without busybox is now the default; "
            "use is_rooted()",
            DeprecationWarning,
            stacklevel=2,
        )
        return self.is_rooted()

    # Individual signals

    def _signal(self, name: str) -> bool:
        return self.engine.evaluate_signal(name).positive

    def _adhoc(self, name: str, check, failure_policy: FailurePolicy = FailurePolicy.FAIL_OPEN) -> bool:
        return self.engine.run_signal(DetectionSignal(name, check, failure_policy)).positive

    def detect_test_keys(self) -> bool:
        return self._signal(TEST_KEYS)

    def detect_root_management_apps(self, additional: Optional[Iterable[str]] = None) -> bool:
        if not additional:
            return self._signal(ROOT_MANAGEMENT_APPS)
        return self._adhoc(ROOT_MANAGEMENT_APPS,
                           lambda: self.checks.packages.detect_root_management_apps(additional))

    def detect_potentially_dangerous_apps(self, additional: Optional[Iterable[str]] = None) -> bool:
        if not additional:
            return self._signal(DANGEROUS_APPS)
        return self._adhoc(DANGEROUS_APPS,
                           lambda: self.checks.packages.detect_potentially_dangerous_apps(additional))

    def detect_root_cloaking_apps(self, additional: Optional[Iterable[str]] = None) -> bool:
        if not additional:
            return self._signal(ROOT_CLOAKING_APPS)
        return self._adhoc(ROOT_CLOAKING_APPS,
                           lambda: self.checks.detect_root_cloaking_apps(additional))

    def is_any_package_from_list_installed(self, package_names: Sequence[str]) -> bool:
        return self._adhoc("packages",
                           lambda: self.checks.packages.is_any_package_from_list_installed(package_names))

    def check_for_binary(self, filename: str, additional_paths: Optional[Iterable[str]] = None) -> bool:
        probe = self.checks.path_probe
        return self._adhoc(f"binary:{filename}",
                           lambda: probe.check_for_binary(filename, probe.candidate_paths().extend(additional_paths)))

    def check_for_su_binary(self) -> bool:
        return self._signal(SU_BINARY)

    def check_for_busybox_binary(self) -> bool:
        return self._signal(BUSYBOX_BINARY)

    def check_for_magisk_binary(self) -> bool:
        return self._signal(MAGISK_BINARY)

    def check_for_dangerous_props(self) -> bool:
        return self._signal(DANGEROUS_PROPS)

    def check_for_rw_paths(self) -> bool:
        return self._signal(RW_PATHS)

    def check_su_exists(self) -> bool:
        return self._signal(SU_EXISTS)

    def check_for_root_native(self) -> bool:
        return self._signal(ROOT_NATIVE)

    def can_load_native_library(self) -> bool:
        return self._adhoc("native_loaded", self._native_loaded)

    def check_for_native_library_read_access(self) -> bool:
        return self._adhoc("native_read_access", self._native_read_access)

    def _native_loaded(self) -> SignalResult:
        return SignalResult(positive=self.checks.native.was_native_library_loaded())

    def _native_read_access(self) -> SignalResult:
        return SignalResult(positive=self.checks.native.check_for_native_library_read_access())
