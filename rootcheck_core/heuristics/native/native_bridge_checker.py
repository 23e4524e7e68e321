"""
Native bridge checks.

The deep scan is only attempted when the native library loaded. A symbol
that fails to link at call time is a "no evidence" result, not an error.
"""

from typing import Optional, Sequence

from rootcheck_core.logic.models import SignalResult
from rootcheck_core.logic.constants import BINARY_SU
from rootcheck_core.infrastructure.native import NativeUnavailableError
from ..base import BaseCheck
from ..binaries.path_probe import CandidatePathSet


class NativeBridgeChecker(BaseCheck):
    """Native library calls log only while evidence logging is on."""

    @property
    def name(self) -> str:
        return "root_native"

    @property
    def description(self) -> str:
        return "Delegates a stricter su scan to the native library"

    def was_native_library_loaded(self) -> bool:
        return self.host.native_bridge.is_loaded()

    def default_candidates(self) -> Sequence[str]:
        path_env = self.host.path_env if self.config.include_path_env else None
        return CandidatePathSet.build(self.config.su_paths, path_env).full_paths(BINARY_SU)

    def check_for_root_native(self, candidate_full_paths: Optional[Sequence[str]] = None) -> SignalResult:
        bridge = self.host.native_bridge

        if not bridge.is_loaded():
            self.logger.info("We could not load the native library to test for root")
            return SignalResult.negative()

        candidates = list(candidate_full_paths) if candidate_full_paths is not None else self.default_candidates()

        try:
            hit_count = bridge.deep_scan(candidates, log_debug_messages=self.sink.enabled)
        except NativeUnavailableError as e:
            self.logger.warning(f"Native scan unavailable: {e}")
            return SignalResult.negative()

        if hit_count > 0:
            self.emit(f"Native scan found {hit_count} su binaries")
            return SignalResult(positive=True, evidence=[f"native hits: {hit_count}"])

        return SignalResult.negative()

    def check_for_native_library_read_access(self) -> bool:
        """
        Precondition: was_native_library_loaded() is True.

        Returns:
            True when the library can be read, False when access is blocked
        """
        return self.host.native_bridge.probe_read_access(log_debug_messages=self.sink.enabled)

    def detect_cloaking(self) -> SignalResult:
        """
        RootCloak-style hiders let the native library load but block reads
        of it. Loaded-but-unreadable is taken as a sign of such a layer.
        """
        if not self.was_native_library_loaded():
            return SignalResult.negative()

        if self.check_for_native_library_read_access():
            return SignalResult.negative()

        self.emit("Native library loads but cannot be read: root cloak suspected", signal="root_cloaking_apps")
        return SignalResult(positive=True, evidence=["native library read access blocked"])
