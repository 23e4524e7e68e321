"""
Package registry collaborators.
"""

from .package_registry import (
    PackageRegistry,
    PackageNotFoundError,
    StaticPackageRegistry,
    ShellPackageRegistry,
)

__all__ = [
    'PackageRegistry',
    'PackageNotFoundError',
    'StaticPackageRegistry',
    'ShellPackageRegistry',
]
