"""
Signal catalogue.

Every check is registered here as a named DetectionSignal with its failure
policy, and the ordered signal lists behind each verdict entry point are
defined here.
"""

from typing import Optional

from rootcheck_core.logic.models import DetectionConfig, FailurePolicy, SignalResult
from rootcheck_core.infrastructure.device import HostEnvironment
from rootcheck_core.infrastructure.logging import EvidenceSink

from .base import BaseCheck, DetectionSignal, SignalRegistry
from .binaries import PathProbe, SuLocator, CandidatePathSet
from .system import PropertyScanner, MountTableParser, BuildTagsCheck
from .packages import PackageRegistryChecker
from .native import NativeBridgeChecker


ROOT_MANAGEMENT_APPS = "root_management_apps"
DANGEROUS_APPS = "dangerous_apps"
SU_BINARY = "su_binary"
BUSYBOX_BINARY = "busybox_binary"
DANGEROUS_PROPS = "dangerous_props"
RW_PATHS = "rw_paths"
TEST_KEYS = "test_keys"
SU_EXISTS = "su_exists"
ROOT_NATIVE = "root_native"
MAGISK_BINARY = "magisk_binary"
ROOT_CLOAKING_APPS = "root_cloaking_apps"

# Evaluation order of is_rooted()
DEFAULT_SIGNAL_ORDER = (
    ROOT_MANAGEMENT_APPS,
    DANGEROUS_APPS,
    SU_BINARY,
    DANGEROUS_PROPS,
    RW_PATHS,
    TEST_KEYS,
    SU_EXISTS,
    ROOT_NATIVE,
    MAGISK_BINARY,
)

# Evaluation order of is_rooted_with_busybox_check()
BUSYBOX_SIGNAL_ORDER = (
    ROOT_MANAGEMENT_APPS,
    DANGEROUS_APPS,
    SU_BINARY,
    BUSYBOX_BINARY,
    DANGEROUS_PROPS,
    RW_PATHS,
    TEST_KEYS,
    SU_EXISTS,
    ROOT_NATIVE,
    MAGISK_BINARY,
)


class CheckSet:
    """One instance of every check, sharing a host, config and sink."""

    def __init__(self, host: HostEnvironment, config: DetectionConfig, sink: EvidenceSink):
        self.packages = PackageRegistryChecker(host, config, sink)
        self.path_probe = PathProbe(host, config, sink)
        self.su_locator = SuLocator(host, config, sink)
        self.properties = PropertyScanner(host, config, sink)
        self.mounts = MountTableParser(host, config, sink)
        self.build_tags = BuildTagsCheck(host, config, sink)
        self.native = NativeBridgeChecker(host, config, sink)

    def detect_root_cloaking_apps(self, additional=None) -> SignalResult:
        """Known cloaking packages, or a native library that loads but cannot be read."""
        packages = self.packages.detect_root_cloaking_packages(additional)
        cloak = self.native.detect_cloaking()
        return SignalResult(positive=packages.positive or cloak.positive,
                            evidence=packages.evidence + cloak.evidence)


def build_signal_registry(checks: CheckSet) -> SignalRegistry:
    """Register every signal with its failure policy."""
    return SignalRegistry([
        DetectionSignal(ROOT_MANAGEMENT_APPS, checks.packages.detect_root_management_apps,
                        description="Known root management apps installed"),
        DetectionSignal(DANGEROUS_APPS, checks.packages.detect_potentially_dangerous_apps,
                        description="Apps that require root installed"),
        DetectionSignal(SU_BINARY, checks.path_probe.check_for_su_binary,
                        description="su binary present in a candidate directory"),
        DetectionSignal(BUSYBOX_BINARY, checks.path_probe.check_for_busybox_binary,
                        description="busybox binary present in a candidate directory"),
        DetectionSignal(DANGEROUS_PROPS, checks.properties.check_for_dangerous_props,
                        failure_policy=FailurePolicy.FAIL_CLOSED,
                        description="Dangerous system properties set"),
        DetectionSignal(RW_PATHS, checks.mounts.check_for_rw_paths,
                        description="System paths mounted read-write"),
        DetectionSignal(TEST_KEYS, checks.build_tags.detect_test_keys,
                        description="Build signed with test keys"),
        DetectionSignal(SU_EXISTS, checks.su_locator.check_su_exists,
                        description="su resolvable from the host shell"),
        DetectionSignal(ROOT_NATIVE, checks.native.check_for_root_native,
                        description="Native scan found su"),
        DetectionSignal(MAGISK_BINARY, checks.path_probe.check_for_magisk_binary,
                        description="magisk binary present in a candidate directory"),
        DetectionSignal(ROOT_CLOAKING_APPS, checks.detect_root_cloaking_apps,
                        description="Root cloaking apps installed or native reads blocked"),
    ])


def get_all_signal_names(registry: Optional[SignalRegistry] = None):
    """Names of every signal, in registration order."""
    if registry is not None:
        return registry.get_available_signals()
    return list(BUSYBOX_SIGNAL_ORDER) + [ROOT_CLOAKING_APPS]


__all__ = [
    'BaseCheck',
    'DetectionSignal',
    'SignalRegistry',
    'CandidatePathSet',
    'CheckSet',
    'build_signal_registry',
    'get_all_signal_names',
    'DEFAULT_SIGNAL_ORDER',
    'BUSYBOX_SIGNAL_ORDER',
]
