"""
Installed package checks.

Asks the host package registry about well-known root management apps,
apps that need root to work, and apps that hide root. Each list can be
extended per call with caller-supplied names; the extension is not kept.
"""

from typing import Iterable, List, Optional, Sequence

from rootcheck_core.logic.models import SignalResult
from rootcheck_core.infrastructure.packages import PackageNotFoundError
from ..base import BaseCheck


def _with_additional(static_names: Sequence[str], additional: Optional[Iterable[str]]) -> List[str]:
    names = list(static_names)
    if additional:
        names.extend(additional)
    return names


class PackageRegistryChecker(BaseCheck):

    @property
    def name(self) -> str:
        return "packages"

    @property
    def description(self) -> str:
        return "Checks the package registry for known root-related apps"

    def is_any_package_from_list_installed(self, package_names: Sequence[str],
                                           signal: Optional[str] = None) -> SignalResult:
        """
        Look up every package; the full list is always queried so every
        installed match is logged.

        Raises:
            Exception: whatever the registry raises other than a miss
        """
        hits = []
        registry = self.host.package_registry

        for package_name in package_names:
            try:
                location = registry.lookup(package_name)
            except PackageNotFoundError:
                # Package is not installed on the host
                continue

            self.emit(f"{package_name} ROOT management app detected! ({location})", signal=signal)
            hits.append(package_name)

        return SignalResult.from_evidence(hits)

    def detect_root_management_apps(self, additional: Optional[Iterable[str]] = None) -> SignalResult:
        packages = _with_additional(self.config.root_apps_packages, additional)
        return self.is_any_package_from_list_installed(packages, signal="root_management_apps")

    def detect_potentially_dangerous_apps(self, additional: Optional[Iterable[str]] = None) -> SignalResult:
        packages = _with_additional(self.config.dangerous_apps_packages, additional)
        return self.is_any_package_from_list_installed(packages, signal="dangerous_apps")

    def detect_root_cloaking_packages(self, additional: Optional[Iterable[str]] = None) -> SignalResult:
        packages = _with_additional(self.config.root_cloaking_packages, additional)
        return self.is_any_package_from_list_installed(packages, signal="root_cloaking_apps")
