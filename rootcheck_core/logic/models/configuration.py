"""
Configuration domain models.

Centralizes the static detection data and tunables instead of scattering
them through the checks.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional
import json
from pathlib import Path

import yaml

from ..constants import (
    KNOWN_ROOT_APPS_PACKAGES,
    KNOWN_DANGEROUS_APPS_PACKAGES,
    KNOWN_ROOT_CLOAKING_PACKAGES,
    SU_PATHS,
    PATHS_THAT_SHOULD_NOT_BE_WRITABLE,
    DANGEROUS_PROPS,
    LEGACY_MOUNT_SDK_THRESHOLD,
    PROPERTIES_COMMAND,
    MOUNT_COMMAND,
    LOCATE_SU_COMMAND,
)


AGGREGATION_MODES = ('short_circuit', 'exhaustive', 'concurrent')


def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Configuration section '{key}' must be a mapping, got {type(value).__name__}")
    return value


@dataclass
class DetectionConfig:
    """
    Main configuration for root detection.

    Package and path lists are read-only once the engine is built; callers
    extend them per call instead of mutating them.
    """

    # Static detection data
    root_apps_packages: List[str] = field(default_factory=lambda: list(KNOWN_ROOT_APPS_PACKAGES))
    dangerous_apps_packages: List[str] = field(default_factory=lambda: list(KNOWN_DANGEROUS_APPS_PACKAGES))
    root_cloaking_packages: List[str] = field(default_factory=lambda: list(KNOWN_ROOT_CLOAKING_PACKAGES))
    su_paths: List[str] = field(default_factory=lambda: list(SU_PATHS))
    paths_that_should_not_be_writable: List[str] = field(
        default_factory=lambda: list(PATHS_THAT_SHOULD_NOT_BE_WRITABLE)
    )
    dangerous_props: Dict[str, str] = field(default_factory=lambda: dict(DANGEROUS_PROPS))

    # Inspection commands
    properties_command: List[str] = field(default_factory=lambda: list(PROPERTIES_COMMAND))
    mount_command: List[str] = field(default_factory=lambda: list(MOUNT_COMMAND))
    locate_su_command: List[str] = field(default_factory=lambda: list(LOCATE_SU_COMMAND))

    # Parsing and probing
    legacy_mount_sdk_threshold: int = LEGACY_MOUNT_SDK_THRESHOLD
    include_path_env: bool = True

    # Execution
    command_timeout_seconds: float = 10.0
    aggregation: str = "short_circuit"
    max_workers: int = 4
    signal_timeout_seconds: float = 30.0

    # Evidence logging
    logging_enabled: bool = True

    # Host overrides (None = ask the host)
    native_library: Optional[str] = None
    sdk_version: Optional[int] = None
    build_tags: Optional[str] = None

    def __post_init__(self):
        """Validate detection configuration."""
        if self.aggregation not in AGGREGATION_MODES:
            raise ValueError(f"Invalid aggregation mode: {self.aggregation} (expected one of {AGGREGATION_MODES})")

        if self.command_timeout_seconds <= 0:
            raise ValueError("command_timeout_seconds must be positive")

        if self.signal_timeout_seconds <= 0:
            raise ValueError("signal_timeout_seconds must be positive")

        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")

        for name in ('properties_command', 'mount_command', 'locate_su_command'):
            if not getattr(self, name):
                raise ValueError(f"{name} cannot be empty")

        # Binaries are probed as directory + name
        self.su_paths = [path if path.endswith('/') else path + '/' for path in self.su_paths]

    @classmethod
    def from_file(cls, file_path: str) -> 'DetectionConfig':
        """Load configuration from a file (JSON or YAML)."""
        path = Path(file_path)

        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {file_path}")

        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yml', '.yaml']:
                data = yaml.safe_load(f) or {}
            else:
                data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DetectionConfig':
        """
        Create configuration from dictionary.

        A section that is present but empty (every entry commented out in
        YAML) reads as absent.

        Raises:
            ValueError: the document or one of its sections is not a mapping
        """
        if not isinstance(data, dict):
            raise ValueError(f"Configuration must be a mapping, got {type(data).__name__}")

        packages = _section(data, 'packages')
        paths = _section(data, 'paths')
        commands = _section(data, 'commands')
        execution = _section(data, 'execution')
        host = _section(data, 'host')
        defaults = cls()

        return cls(
            root_apps_packages=list(packages.get('root_management', defaults.root_apps_packages)),
            dangerous_apps_packages=list(packages.get('dangerous', defaults.dangerous_apps_packages)),
            root_cloaking_packages=list(packages.get('root_cloaking', defaults.root_cloaking_packages)),
            su_paths=list(paths.get('su_paths', defaults.su_paths)),
            paths_that_should_not_be_writable=list(
                paths.get('should_not_be_writable', defaults.paths_that_should_not_be_writable)
            ),
            dangerous_props={
                str(key): str(value)
                for key, value in (_section(data, 'dangerous_props') or defaults.dangerous_props).items()
            },
            properties_command=list(commands.get('properties', defaults.properties_command)),
            mount_command=list(commands.get('mount', defaults.mount_command)),
            locate_su_command=list(commands.get('locate_su', defaults.locate_su_command)),
            legacy_mount_sdk_threshold=data.get('legacy_mount_sdk_threshold', LEGACY_MOUNT_SDK_THRESHOLD),
            include_path_env=paths.get('include_path_env', True),
            command_timeout_seconds=execution.get('command_timeout_seconds', 10.0),
            aggregation=execution.get('aggregation', 'short_circuit'),
            max_workers=execution.get('max_workers', 4),
            signal_timeout_seconds=execution.get('signal_timeout_seconds', 30.0),
            logging_enabled=data.get('logging_enabled', True),
            native_library=host.get('native_library'),
            sdk_version=host.get('sdk_version'),
            build_tags=host.get('build_tags'),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            'packages': {
                'root_management': list(self.root_apps_packages),
                'dangerous': list(self.dangerous_apps_packages),
                'root_cloaking': list(self.root_cloaking_packages),
            },
            'paths': {
                'su_paths': list(self.su_paths),
                'should_not_be_writable': list(self.paths_that_should_not_be_writable),
                'include_path_env': self.include_path_env,
            },
            'dangerous_props': dict(self.dangerous_props),
            'commands': {
                'properties': list(self.properties_command),
                'mount': list(self.mount_command),
                'locate_su': list(self.locate_su_command),
            },
            'legacy_mount_sdk_threshold': self.legacy_mount_sdk_threshold,
            'execution': {
                'command_timeout_seconds': self.command_timeout_seconds,
                'aggregation': self.aggregation,
                'max_workers': self.max_workers,
                'signal_timeout_seconds': self.signal_timeout_seconds,
            },
            'logging_enabled': self.logging_enabled,
            'host': {
                'native_library': self.native_library,
                'sdk_version': self.sdk_version,
                'build_tags': self.build_tags,
            },
        }

    def save_to_file(self, file_path: str):
        """Save configuration to a file."""
        path = Path(file_path)

        with open(path, 'w', encoding='utf-8') as f:
            if path.suffix.lower() in ['.yml', '.yaml']:
                yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)
            else:
                json.dump(self.to_dict(), f, indent=2)
