"""
Dangerous system property detection.

Matches `getprop` lines such as `[ro.debuggable]: [1]` against a map of
property keys to values that should never appear on a production build.

Matching is plain substring containment of the key and of the bracketed
value. An unrelated line that happens to contain both substrings matches
too; that looseness is kept as-is.
"""

from rootcheck_core.logic.models import SignalResult
from ..base import BaseCheck


class PropertyScanner(BaseCheck):
    """
    Scans the properties dump for dangerous key/value pairs.

    This is the one check registered FAIL_CLOSED: if the dump cannot be
    read at all, the host is assumed rooted.
    """

    @property
    def name(self) -> str:
        return "dangerous_props"

    @property
    def description(self) -> str:
        return "Looks for ro.debuggable=1, ro.secure=0 and similar properties"

    def check_for_dangerous_props(self) -> SignalResult:
        """
        Raises:
            InvocationError: the properties dump could not be read
        """
        lines = self.host.invoker.run(self.config.properties_command)
        return self.scan_lines(lines)

    def scan_lines(self, lines) -> SignalResult:
        """Match every line against every dangerous key; never stops early."""
        hits = []

        for line in lines:
            for key, bad_value in self.config.dangerous_props.items():
                if key not in line:
                    continue
                bracketed = f"[{bad_value}]"
                if bracketed in line:
                    self.emit(f"{key} = {bracketed} detected!")
                    hits.append(line.strip())

        return SignalResult.from_evidence(hits)
