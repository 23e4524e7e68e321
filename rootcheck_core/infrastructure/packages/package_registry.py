"""
Package registry collaborators.

The registry answers one question: is a given package identifier installed?
A miss is signalled with PackageNotFoundError, the expected common case.
"""

import logging
from abc import ABC, abstractmethod
from typing import Iterable

from ..process.process_invoker import ProcessInvoker, InvocationError


class PackageNotFoundError(Exception):
    """The package is not installed on the host."""

    def __init__(self, package_name: str):
        self.package_name = package_name
        super().__init__(f"Package not installed: {package_name}")


class PackageRegistry(ABC):
    """Host package-installation registry."""

    @abstractmethod
    def lookup(self, package_name: str) -> str:
        """
        Look up an installed package.

        Args:
            package_name: Package identifier, e.g. "com.topjohnwu.magisk"

        Returns:
            A short description of the installed package (install path or
            similar) usable as evidence

        Raises:
            PackageNotFoundError: the package is not installed
        """
        pass


class StaticPackageRegistry(PackageRegistry):
    """Registry backed by a fixed set of installed package names."""

    def __init__(self, installed: Iterable[str] = ()):
        self._installed = frozenset(installed)

    def lookup(self, package_name: str) -> str:
        if package_name not in self._installed:
            raise PackageNotFoundError(package_name)
        return package_name


class ShellPackageRegistry(PackageRegistry):
    """
    Registry queried with `pm path <package>` on the host.

    `pm path` prints one `package:/data/app/.../base.apk` line per APK of an
    installed package and nothing for a missing one. A failed invocation is
    indistinguishable from a miss on stock devices, so both raise
    PackageNotFoundError.
    """

    def __init__(self, invoker: ProcessInvoker):
        self.invoker = invoker
        self.logger = logging.getLogger("packages.registry")

    def lookup(self, package_name: str) -> str:
        try:
            lines = self.invoker.run(['pm', 'path', package_name])
        except InvocationError as e:
            self.logger.debug(f"pm path {package_name}: {e}")
            raise PackageNotFoundError(package_name) from e

        for line in lines:
            line = line.strip()
            if line.startswith('package:'):
                return line.split(':', 1)[1]

        raise PackageNotFoundError(package_name)
