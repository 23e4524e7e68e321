"""
Host environment: every leaf dependency of the checks, in one place.

A check never spawns a process, touches the filesystem or queries the
package manager directly. It asks the HostEnvironment, which is wired
either to this machine or to an ADB-attached device.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from ..process.process_invoker import ProcessInvoker, LocalProcessInvoker, AdbShellInvoker, InvocationError
from ..filesystem.file_probe import FileProbe, LocalFileProbe, ShellFileProbe
from ..packages.package_registry import PackageRegistry, ShellPackageRegistry
from ..native.native_bridge import NativeBridge, UnavailableNativeBridge, load_native_bridge
from .adb_device_detector import AdbDevice
from rootcheck_core.logic.models import DetectionConfig


logger = logging.getLogger("host.environment")


@dataclass
class HostEnvironment:
    """Leaf collaborators for one inspected host."""
    name: str
    invoker: ProcessInvoker
    file_probe: FileProbe
    package_registry: PackageRegistry
    native_bridge: NativeBridge
    sdk_version: Optional[int] = None
    build_tags: Optional[str] = None
    path_env: Optional[str] = None
    android_version: Optional[str] = None

    @classmethod
    def local(cls, config: Optional[DetectionConfig] = None) -> 'HostEnvironment':
        """Host environment for the machine Python is running on."""
        config = config or DetectionConfig()
        invoker = LocalProcessInvoker(timeout_seconds=config.command_timeout_seconds)

        return cls(
            name="local",
            invoker=invoker,
            file_probe=LocalFileProbe(),
            package_registry=ShellPackageRegistry(invoker),
            native_bridge=load_native_bridge(config.native_library),
            sdk_version=_resolve_sdk_version(invoker, config),
            build_tags=_resolve_build_tags(invoker, config),
            path_env=os.environ.get('PATH'),
            android_version=read_property(invoker, 'ro.build.version.release'),
        )

    @classmethod
    def adb(cls, device_serial: str, config: Optional[DetectionConfig] = None,
            adb_command: str = "adb", device: Optional[AdbDevice] = None) -> 'HostEnvironment':
        """
        Host environment for a device reached through `adb shell`.

        Versions already read while enumerating `device` are reused
        instead of asking the device again.
        """
        config = config or DetectionConfig()
        invoker = AdbShellInvoker(device_serial, adb_command=adb_command,
                                  timeout_seconds=config.command_timeout_seconds)

        return cls(
            name=f"adb:{device_serial}",
            invoker=invoker,
            file_probe=ShellFileProbe(invoker),
            package_registry=ShellPackageRegistry(invoker),
            # The native scanner has to run on the device itself
            native_bridge=UnavailableNativeBridge("native scan is not available over adb"),
            sdk_version=_resolve_sdk_version(invoker, config, device.sdk_version if device else None),
            build_tags=_resolve_build_tags(invoker, config),
            path_env=_read_remote_path(invoker),
            android_version=(device.android_version if device and device.android_version
                             else read_property(invoker, 'ro.build.version.release')),
        )


def read_property(invoker: ProcessInvoker, key: str) -> Optional[str]:
    """Read a single system property, None if it is unset or unreadable."""
    try:
        lines = invoker.run(['getprop', key])
    except InvocationError as e:
        logger.debug(f"Could not read {key}: {e}")
        return None

    value = lines[0].strip() if lines else ''
    return value or None


def _resolve_sdk_version(invoker: ProcessInvoker, config: DetectionConfig,
                         known: Optional[int] = None) -> Optional[int]:
    if config.sdk_version is not None:
        return config.sdk_version
    if known is not None:
        return known

    value = read_property(invoker, 'ro.build.version.sdk')
    if value is None or not value.isdigit():
        logger.warning("Host SDK level unknown; mount lines will be parsed in the modern format")
        return None
    return int(value)


def _resolve_build_tags(invoker: ProcessInvoker, config: DetectionConfig) -> Optional[str]:
    if config.build_tags is not None:
        return config.build_tags
    return read_property(invoker, 'ro.build.tags')


def _read_remote_path(invoker: ProcessInvoker) -> Optional[str]:
    # Unquoted so the device shell expands it
    try:
        lines = invoker.run(['echo', '$PATH'])
    except InvocationError as e:
        logger.debug(f"Could not read device PATH: {e}")
        return None
    return lines[0].strip() or None
