"""
Native bridge checks.
"""

from .native_bridge_checker import NativeBridgeChecker

__all__ = [
    'NativeBridgeChecker',
]
