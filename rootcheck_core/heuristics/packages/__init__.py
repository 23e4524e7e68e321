"""
Installed package checks.
"""

from .package_registry_checker import PackageRegistryChecker

__all__ = [
    'PackageRegistryChecker',
]
