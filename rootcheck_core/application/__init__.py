"""
Application layer: the public detector API and the CLI use case.
"""

from .root_detector import RootDetector
from .check_device import CheckDeviceUseCase, ConfigurationError, DeviceSelectionError, UsageError

__all__ = [
    'RootDetector',
    'CheckDeviceUseCase',
    'DeviceSelectionError',
    'UsageError',
    'ConfigurationError',
]
