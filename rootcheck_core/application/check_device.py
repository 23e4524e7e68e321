"""
Use case: compute a root verdict for a device.

Resolves the target (this machine, a given ADB serial, or the single
attached ADB device), runs the detector and returns the report as a
JSON-ready dict.
"""

import logging
from typing import Any, Dict, List, Optional

import yaml

from rootcheck_core.logic.models import DetectionConfig, AGGREGATION_MODES
from rootcheck_core.logic.services import create_strategy
from rootcheck_core.heuristics import get_all_signal_names
from rootcheck_core.infrastructure.device import AdbDeviceDetector, HostEnvironment
from rootcheck_core.infrastructure.logging import enhanced_logger
from rootcheck_core.infrastructure.shared import get_error_service
from .root_detector import RootDetector


class DeviceSelectionError(Exception):
    """No usable target could be resolved."""
    pass


class UsageError(Exception):
    """Command line arguments could not be understood."""
    pass


class ConfigurationError(Exception):
    """The configuration file could not be loaded."""
    pass


USAGE = (
    "usage: rootcheck [--device SERIAL | --local] [--busybox] [--mode {modes}] "
    "[--signal NAME] [--config PATH] [--log-file PATH] [--no-evidence-log] [-v] [--version]"
).format(modes="|".join(AGGREGATION_MODES))


class CheckDeviceUseCase:
    """Wires configuration, target selection and the detector together."""

    def __init__(self, config_path: Optional[str] = None, verbose: bool = False,
                 device_detector: Optional[AdbDeviceDetector] = None):
        self.logger = logging.getLogger("check.device")
        self.verbose = verbose
        self.config_path = config_path
        self._config: Optional[DetectionConfig] = None
        self._device_detector = device_detector

    @property
    def config(self) -> DetectionConfig:
        """
        Loaded on first use, so a broken file is reported like any usage error.

        Raises:
            ConfigurationError: the file is missing, unparseable or invalid
        """
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def _load_config(self) -> DetectionConfig:
        if not self.config_path:
            return DetectionConfig()

        try:
            config = DetectionConfig.from_file(self.config_path)
        except (OSError, yaml.YAMLError, ValueError, TypeError) as e:
            raise ConfigurationError(f"Invalid configuration {self.config_path}: {e}") from e

        self.logger.info(f"Loaded configuration from {self.config_path}")
        return config

    @property
    def device_detector(self) -> AdbDeviceDetector:
        # Probing for adb spawns processes; only do it when a device is needed
        if self._device_detector is None:
            self._device_detector = AdbDeviceDetector()
        return self._device_detector

    def resolve_host(self, device_serial: Optional[str] = None, local: bool = False) -> HostEnvironment:
        """
        Raises:
            DeviceSelectionError: no device matches, or adb is unavailable
        """
        if local:
            return HostEnvironment.local(self.config)

        detector = self.device_detector
        if not detector.is_adb_available():
            raise DeviceSelectionError("adb not found; use --local to inspect this machine")

        if device_serial:
            device = detector.select_device_by_serial(device_serial)
        else:
            device = detector.get_single_device()

        if device is None:
            target = device_serial or "any attached device"
            raise DeviceSelectionError(f"No ready ADB device found for {target}")

        return HostEnvironment.adb(device.serial, self.config, adb_command=detector.adb_command, device=device)

    def execute(self, host: HostEnvironment, include_busybox: bool = False,
                mode: Optional[str] = None, signal: Optional[str] = None,
                evidence_log: bool = True) -> Dict[str, Any]:
        """Run the detector against a resolved host."""
        strategy = None
        if mode:
            strategy = create_strategy(mode, max_workers=self.config.max_workers,
                                       timeout_seconds=self.config.signal_timeout_seconds)

        # Failures listed in the result are the ones from this run only
        errors = get_error_service()
        errors.reset_error_stats()

        detector = RootDetector(host, self.config, strategy=strategy)
        if not evidence_log:
            detector.set_logging(False)

        if signal:
            outcome = detector.engine.evaluate_signal(signal)
            return {
                'target': host.name,
                'rooted': outcome.positive,
                'signal': outcome.to_dict(),
                'failures': [error.to_dict() for error in errors.get_recent_errors()],
            }

        report = detector.evaluate(include_busybox=include_busybox)
        result = report.to_dict()
        result['target'] = host.name
        result['host'] = {
            'sdkVersion': host.sdk_version,
            'androidVersion': host.android_version,
            'buildTags': host.build_tags,
            'nativeBridgeLoaded': host.native_bridge.is_loaded(),
        }
        result['failures'] = [error.to_dict() for error in errors.get_recent_errors()]
        return result

    def execute_from_command_line(self, args: List[str]) -> Dict[str, Any]:
        """
        Parse arguments, run, and return a JSON-ready dict.

        Errors are reported in the payload under "error" instead of raised.
        """
        try:
            options = self.parse_arguments(args)

            if options['log_file']:
                enhanced_logger.setup_logging(verbose=self.verbose, log_file=options['log_file'])

            host = self.resolve_host(options['device'], options['local'])
            enhanced_logger.log_system_info(host.name)

            return self.execute(
                host,
                include_busybox=options['busybox'],
                mode=options['mode'],
                signal=options['signal'],
                evidence_log=options['evidence_log'],
            )

        except (UsageError, ConfigurationError, DeviceSelectionError, KeyError, ValueError) as e:
            self.logger.error(str(e))
            return {'error': str(e), 'usage': USAGE, 'rooted': None}

    def parse_arguments(self, args: List[str]) -> Dict[str, Any]:
        options = {
            'device': None,
            'local': False,
            'busybox': False,
            'mode': None,
            'signal': None,
            'log_file': None,
            'evidence_log': True,
        }
        valued = {'--device': 'device', '--mode': 'mode', '--signal': 'signal', '--log-file': 'log_file'}

        i = 0
        while i < len(args):
            arg = args[i]
            if arg in valued:
                if i + 1 >= len(args):
                    raise UsageError(f"{arg} requires a value")
                options[valued[arg]] = args[i + 1]
                i += 2
                continue

            if arg == '--local':
                options['local'] = True
            elif arg == '--busybox':
                options['busybox'] = True
            elif arg == '--no-evidence-log':
                options['evidence_log'] = False
            else:
                raise UsageError(f"Unknown argument: {arg}")
            i += 1

        if options['local'] and options['device']:
            raise UsageError("--local and --device are mutually exclusive")

        if options['mode'] and options['mode'] not in AGGREGATION_MODES:
            raise UsageError(f"Unknown mode: {options['mode']}")

        if options['signal'] and options['signal'] not in get_all_signal_names():
            raise UsageError(f"Unknown signal: {options['signal']}")

        return options
