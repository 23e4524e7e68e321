"""
ADB device discovery.

Finds an adb executable and lists attached devices, so a verdict can be
computed for "the attached phone" without the caller knowing its serial.
All adb traffic goes through the same process invokers the checks use.
"""

import logging
import re
import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from ..process.process_invoker import LocalProcessInvoker, AdbShellInvoker, InvocationError


@dataclass
class AdbDevice:
    """One line of `adb devices -l`, optionally enriched from its properties."""
    serial: str
    state: str  # device, offline, unauthorized, recovery, ...
    model: Optional[str] = None
    android_version: Optional[str] = None
    sdk_version: Optional[int] = None

    def __post_init__(self):
        if not self.serial:
            raise ValueError("Device serial cannot be empty")

    def is_ready(self) -> bool:
        """Only devices in the `device` state accept shell commands."""
        return self.state == 'device'

    def get_display_name(self) -> str:
        return f"{self.model} ({self.serial})" if self.model else self.serial


class AdbDeviceDetector:
    """Locates adb and the devices attached to it."""

    # Tried after PATH lookup fails
    FALLBACK_ADB_LOCATIONS = (
        "/usr/bin/adb",
        "/usr/local/bin/adb",
        "~/Android/Sdk/platform-tools/adb",
        "~/Library/Android/sdk/platform-tools/adb",
    )

    PROPERTY_LINE = re.compile(r'\[([^\]]+)\]:\s*\[([^\]]*)\]')

    def __init__(self, adb_command: Optional[str] = None, timeout_seconds: float = 10.0):
        self.logger = logging.getLogger("adb.detector")
        self.timeout_seconds = timeout_seconds
        self._adb_command = adb_command or self._find_adb_command()

    @property
    def adb_command(self) -> Optional[str]:
        return self._adb_command

    def _find_adb_command(self) -> Optional[str]:
        candidates = [shutil.which("adb")]
        candidates.extend(str(Path(location).expanduser()) for location in self.FALLBACK_ADB_LOCATIONS)

        probe = LocalProcessInvoker(timeout_seconds=5)
        for candidate in filter(None, candidates):
            try:
                probe.run([candidate, "version"])
            except InvocationError:
                continue
            self.logger.info(f"Found ADB at: {candidate}")
            return candidate

        self.logger.warning("adb not found on PATH or in the usual SDK locations")
        return None

    def is_adb_available(self) -> bool:
        return self._adb_command is not None

    def detect_devices(self) -> List[AdbDevice]:
        """
        List attached devices.

        Returns:
            Every listed device; ready ones are enriched with model and SDK
            level. Empty when adb is missing or the server cannot be reached.
        """
        if not self._adb_command:
            self.logger.error("adb not available")
            return []

        invoker = LocalProcessInvoker(timeout_seconds=self.timeout_seconds)
        try:
            lines = invoker.run([self._adb_command, "devices", "-l"])
        except InvocationError as e:
            self.logger.error(f"Listing ADB devices failed: {e}")
            return []

        devices = self.parse_device_list('\n'.join(lines))
        for device in devices:
            self._enrich_device_info(device)

        self.logger.info(f"Detected {len(devices)} ADB devices")
        return devices

    def parse_device_list(self, adb_output: str) -> List[AdbDevice]:
        """Parse `adb devices -l`: a header, then `serial state key:value...` lines."""
        devices = []

        for line in adb_output.strip().splitlines()[1:]:
            fields = line.split()
            # "* daemon started successfully" and similar server chatter
            if len(fields) < 2 or fields[0] == '*':
                continue

            attributes = dict(field.split(':', 1) for field in fields[2:] if ':' in field)
            devices.append(AdbDevice(serial=fields[0], state=fields[1], model=attributes.get('model')))

        return devices

    def parse_properties(self, getprop_output: str) -> Dict[str, str]:
        """Parse `getprop` output lines of the form `[key]: [value]`."""
        matches = (self.PROPERTY_LINE.match(line.strip()) for line in getprop_output.splitlines())
        return dict(match.groups() for match in matches if match)

    def _enrich_device_info(self, device: AdbDevice) -> AdbDevice:
        if not device.is_ready():
            return device

        invoker = AdbShellInvoker(device.serial, adb_command=self._adb_command,
                                  timeout_seconds=self.timeout_seconds)
        try:
            properties = self.parse_properties('\n'.join(invoker.run(["getprop"])))
        except InvocationError as e:
            self.logger.warning(f"Could not read properties of {device.serial}: {e}")
            return device

        device.model = device.model or properties.get('ro.product.model')
        device.android_version = properties.get('ro.build.version.release')
        sdk = properties.get('ro.build.version.sdk', '')
        if sdk.isdigit():
            device.sdk_version = int(sdk)

        return device

    def get_ready_devices(self) -> List[AdbDevice]:
        return [device for device in self.detect_devices() if device.is_ready()]

    def get_single_device(self) -> Optional[AdbDevice]:
        """
        The one ready device.

        Returns:
            None when no device, or more than one, is ready
        """
        ready_devices = self.get_ready_devices()

        if len(ready_devices) == 1:
            self.logger.info(f"Using device: {ready_devices[0].get_display_name()}")
            return ready_devices[0]

        if ready_devices:
            self._log_choices(ready_devices)
        else:
            self.logger.warning("No ADB devices ready")
        return None

    def _log_choices(self, devices: Sequence[AdbDevice]) -> None:
        self.logger.warning(f"{len(devices)} devices attached; pass --device SERIAL to pick one")
        for device in devices:
            self.logger.info(f"  - {device.get_display_name()}")

    def select_device_by_serial(self, serial: str) -> Optional[AdbDevice]:
        device = next((d for d in self.get_ready_devices() if d.serial == serial), None)

        if device is None:
            self.logger.error(f"Device '{serial}' is not attached or not ready")
        else:
            self.logger.info(f"Selected device: {device.get_display_name()}")
        return device
