"""Tests for the process invokers."""
import subprocess
import sys

import pytest

from rootcheck_core.infrastructure.process import (
    LocalProcessInvoker,
    AdbShellInvoker,
    SpawnFailedError,
    EmptyOutputError,
    InvocationTimeoutError,
    InvocationError,
)


def _python(code):
    return [sys.executable, "-c", code]


class TestLocalProcessInvoker:
    def test_returns_stdout_lines(self):
        invoker = LocalProcessInvoker()
        lines = invoker.run(_python("print('first'); print('second')"))
        assert lines == ["first", "second"]

    def test_strips_carriage_returns(self):
        invoker = LocalProcessInvoker()
        lines = invoker.run(_python("import sys; sys.stdout.write('a\\r\\nb\\r\\n')"))
        assert lines == ["a", "b"]

    def test_empty_stdout_raises(self):
        invoker = LocalProcessInvoker()
        with pytest.raises(EmptyOutputError):
            invoker.run(_python("pass"))

    def test_blank_lines_only_give_one_blank_line(self):
        invoker = LocalProcessInvoker()
        assert invoker.run(_python("print(); print()")) == [""]

    def test_trailing_blank_lines_dropped(self):
        invoker = LocalProcessInvoker()
        assert invoker.run(_python("print('/sbin/su'); print()")) == ["/sbin/su"]

    def test_stderr_is_ignored(self):
        invoker = LocalProcessInvoker()
        lines = invoker.run(_python("import sys; sys.stderr.write('noise\\n'); print('out')"))
        assert lines == ["out"]

    def test_nonzero_exit_still_returns_output(self):
        invoker = LocalProcessInvoker()
        lines = invoker.run(_python("print('partial'); raise SystemExit(3)"))
        assert lines == ["partial"]

    def test_missing_binary_raises_spawn_failed(self):
        invoker = LocalProcessInvoker()
        with pytest.raises(SpawnFailedError):
            invoker.run(["definitely-not-a-real-binary-rootcheck"])

    def test_timeout(self):
        invoker = LocalProcessInvoker(timeout_seconds=0.5)
        with pytest.raises(InvocationTimeoutError):
            invoker.run(_python("import time; time.sleep(10)"))

    def test_all_failures_share_base_class(self):
        for error in (SpawnFailedError, EmptyOutputError, InvocationTimeoutError):
            assert issubclass(error, InvocationError)

    def test_error_message_names_command(self):
        error = EmptyOutputError(["getprop"], "no output")
        assert error.argv == ["getprop"]
        assert "getprop" in str(error)


class TestAdbShellInvoker:
    def test_build_command(self):
        invoker = AdbShellInvoker("emulator-5554")
        assert invoker.build_command(["which", "su"]) == ["adb", "-s", "emulator-5554", "shell", "which", "su"]

    def test_custom_adb_command(self):
        invoker = AdbShellInvoker("abc", adb_command="/opt/adb")
        assert invoker.build_command(["mount"])[0] == "/opt/adb"

    def test_empty_serial_rejected(self):
        with pytest.raises(ValueError):
            AdbShellInvoker("")

    def test_run_passes_timeout(self, monkeypatch):
        captured = {}

        def fake_run(cmd, **kwargs):
            captured['cmd'] = cmd
            captured['timeout'] = kwargs.get('timeout')
            return subprocess.CompletedProcess(cmd, 0, stdout="[ro.secure]: [1]\n")

        monkeypatch.setattr(subprocess, "run", fake_run)

        invoker = AdbShellInvoker("serial1", timeout_seconds=7)
        assert invoker.run(["getprop"]) == ["[ro.secure]: [1]"]
        assert captured['cmd'] == ["adb", "-s", "serial1", "shell", "getprop"]
        assert captured['timeout'] == 7
