"""Tests for the command line use case and entry point."""
import json

import pytest

from rootcheck_core import __version__, cli
from rootcheck_core.application import CheckDeviceUseCase, DeviceSelectionError, UsageError
from rootcheck_core.infrastructure.device import AdbDevice, AdbDeviceDetector, HostEnvironment
from rootcheck_core.infrastructure.process import EmptyOutputError

from conftest import make_host


class FakeDeviceDetector(AdbDeviceDetector):
    def __init__(self, devices, adb_command="adb"):
        super().__init__(adb_command=adb_command)
        self.devices = devices

    def is_adb_available(self):
        return self.adb_command is not None

    def get_ready_devices(self):
        return [device for device in self.devices if device.is_ready()]


@pytest.fixture
def use_case():
    return CheckDeviceUseCase(device_detector=FakeDeviceDetector([]))


@pytest.fixture
def fake_local(monkeypatch):
    host = make_host(installed=["com.topjohnwu.magisk"])
    monkeypatch.setattr(HostEnvironment, "local", classmethod(lambda cls, config=None: host))
    return host


class TestParseArguments:
    def test_defaults(self, use_case):
        options = use_case.parse_arguments([])
        assert options == {
            'device': None,
            'local': False,
            'busybox': False,
            'mode': None,
            'signal': None,
            'log_file': None,
            'evidence_log': True,
        }

    def test_all_options(self, use_case):
        options = use_case.parse_arguments([
            "--device", "emulator-5554", "--busybox", "--mode", "exhaustive",
            "--signal", "su_binary", "--no-evidence-log",
        ])
        assert options['device'] == "emulator-5554"
        assert options['busybox'] is True
        assert options['mode'] == "exhaustive"
        assert options['signal'] == "su_binary"
        assert options['evidence_log'] is False

    @pytest.mark.parametrize("args", [
        ["--device"],
        ["--frobnicate"],
        ["--mode", "vote"],
        ["--signal", "nope"],
        ["--local", "--device", "abc"],
    ])
    def test_usage_errors(self, use_case, args):
        with pytest.raises(UsageError):
            use_case.parse_arguments(args)


class TestResolveHost:
    def test_adb_unavailable(self):
        detector = FakeDeviceDetector([])
        detector._adb_command = None
        use_case = CheckDeviceUseCase(device_detector=detector)
        with pytest.raises(DeviceSelectionError):
            use_case.resolve_host()

    def test_no_device(self, use_case):
        with pytest.raises(DeviceSelectionError):
            use_case.resolve_host()

    def test_single_device(self, monkeypatch):
        captured = {}

        def fake_adb(cls, serial, config=None, adb_command="adb", device=None):
            captured['serial'] = serial
            captured['adb_command'] = adb_command
            captured['sdk_version'] = device.sdk_version
            return make_host()

        monkeypatch.setattr(HostEnvironment, "adb", classmethod(fake_adb))
        use_case = CheckDeviceUseCase(device_detector=FakeDeviceDetector([
            AdbDevice(serial="abc123", state="device", sdk_version=29),
            AdbDevice(serial="offline1", state="offline"),
        ]))

        use_case.resolve_host()
        assert captured == {'serial': "abc123", 'adb_command': "adb", 'sdk_version': 29}

    def test_serial_not_ready(self, use_case):
        use_case.device_detector.devices = [AdbDevice(serial="abc123", state="unauthorized")]
        with pytest.raises(DeviceSelectionError):
            use_case.resolve_host("abc123")

    def test_local(self, use_case, fake_local):
        assert use_case.resolve_host(local=True) is fake_local


class TestExecute:
    def test_full_report(self, use_case, fake_local):
        result = use_case.execute_from_command_line(["--local"])

        assert result['rooted'] is True
        assert result['target'] == "fake"
        assert result['positiveSignals'] == ["root_management_apps"]
        assert result['host']['sdkVersion'] == 30
        assert result['host']['androidVersion'] is None

    def test_single_signal(self, use_case, fake_local):
        result = use_case.execute_from_command_line(["--local", "--signal", "test_keys"])
        assert result['rooted'] is False
        assert result['signal']['name'] == "test_keys"

    def test_converted_failures_are_listed(self, use_case, monkeypatch):
        host = make_host({("getprop",): EmptyOutputError(["getprop"], "no output")})
        monkeypatch.setattr(HostEnvironment, "local", classmethod(lambda cls, config=None: host))

        result = use_case.execute_from_command_line(["--local"])

        assert result['rooted'] is True
        assert result['positiveSignals'] == ["dangerous_props"]
        assert [failure['component'] for failure in result['failures']] == ["dangerous_props"]
        assert result['failures'][0]['errorType'] == "EmptyOutputError"

    def test_error_payload(self, use_case):
        result = use_case.execute_from_command_line(["--bogus"])
        assert result['rooted'] is None
        assert "Unknown argument" in result['error']
        assert result['usage'].startswith("usage: rootcheck")


class TestMain:
    def test_version(self, capsys):
        assert cli.main(["--version"]) == 0
        assert capsys.readouterr().out.strip() == __version__

    def test_usage_error_exit_code(self, capsys):
        assert cli.main(["--bogus"]) == 2
        payload = json.loads(capsys.readouterr().out)
        assert payload['metadata']['engineVersion'] == __version__

    def test_local_run(self, capsys, fake_local):
        assert cli.main(["--local", "--mode", "exhaustive", "--no-evidence-log"]) == 0
        payload = json.loads(capsys.readouterr().out)

        assert payload['rooted'] is True
        assert payload['mode'] == "exhaustive"
        assert payload['metadata']['schemaVersion'] == 1

    @pytest.mark.parametrize("text", ["host: [\n", "host: 23\n", "execution:\n  max_workers: 0\n"])
    def test_bad_config_exit_code(self, capsys, tmp_path, fake_local, text):
        path = tmp_path / "rootcheck.yaml"
        path.write_text(text)

        assert cli.main(["--config", str(path), "--local"]) == 2
        payload = json.loads(capsys.readouterr().out)
        assert payload['rooted'] is None
        assert str(path) in payload['error']

    def test_missing_config_exit_code(self, capsys, tmp_path, fake_local):
        assert cli.main(["--config", str(tmp_path / "nope.yaml"), "--local"]) == 2
        assert "nope.yaml" in json.loads(capsys.readouterr().out)['error']

    def test_config_with_empty_sections(self, capsys, tmp_path, fake_local):
        path = tmp_path / "rootcheck.yaml"
        path.write_text("execution:\n  # aggregation: exhaustive\nhost:\n")

        assert cli.main(["--config", str(path), "--local"]) == 0
        assert json.loads(capsys.readouterr().out)['rooted'] is True
