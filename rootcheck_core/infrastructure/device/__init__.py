"""
Device detection and host wiring.

Handles ADB device detection and assembles the leaf collaborators the
checks run against.
"""

from .adb_device_detector import AdbDeviceDetector, AdbDevice
from .host_environment import HostEnvironment, read_property

__all__ = [
    'AdbDeviceDetector',
    'AdbDevice',
    'HostEnvironment',
    'read_property',
]
