"""
Build signing key check.

Release-keys and test-keys describe how the system image was signed. Test
keys mean it was signed with a key generated by a third party, typical of
custom ROMs and engineering builds.
"""

from rootcheck_core.logic.models import SignalResult
from rootcheck_core.logic.constants import TEST_KEYS_MARKER
from ..base import BaseCheck


class BuildTagsCheck(BaseCheck):

    @property
    def name(self) -> str:
        return "test_keys"

    @property
    def description(self) -> str:
        return "Checks whether the build is signed with test keys"

    def detect_test_keys(self) -> SignalResult:
        build_tags = self.host.build_tags

        if build_tags is not None and TEST_KEYS_MARKER in build_tags:
            self.emit(f"Build tags contain {TEST_KEYS_MARKER}: {build_tags}")
            return SignalResult(positive=True, evidence=[build_tags])

        return SignalResult.negative()
