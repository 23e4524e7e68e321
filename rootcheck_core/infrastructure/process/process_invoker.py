"""
Process invocation for inspection commands.

Runs a command either on this machine or on an ADB-attached device and
hands back its standard output as lines. Only stdout is captured; stderr
and the exit status are diagnostics, never evidence.
"""

import logging
import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence


class InvocationError(Exception):
    """Exception raised when an inspection command yields nothing usable."""

    def __init__(self, argv: Sequence[str], message: str):
        self.argv = list(argv)
        super().__init__(f"{' '.join(self.argv)}: {message}")


class SpawnFailedError(InvocationError):
    """The command could not be started."""
    pass


class EmptyOutputError(InvocationError):
    """The command started but produced no standard output."""
    pass


class InvocationTimeoutError(InvocationError):
    """The command did not finish within the configured timeout."""
    pass


class ProcessInvoker(ABC):
    """
    Base class for running inspection commands.

    Implementations return the command's standard output split on newlines.
    An empty stdout is a failure (EmptyOutputError), not an empty list.
    """

    def __init__(self, timeout_seconds: Optional[float] = 10.0):
        self.timeout_seconds = timeout_seconds
        self.logger = logging.getLogger("process.invoker")

    @abstractmethod
    def build_command(self, argv: Sequence[str]) -> List[str]:
        """Translate the inspection argv into the argv actually spawned."""
        pass

    def run(self, argv: Sequence[str]) -> List[str]:
        """
        Run an inspection command.

        Args:
            argv: Command and arguments as they would be typed on the host

        Returns:
            Standard output lines, in order

        Raises:
            SpawnFailedError: the command could not start
            InvocationTimeoutError: the command outlived the timeout
            EmptyOutputError: the command produced no standard output
        """
        full_cmd = self.build_command(argv)
        self.logger.debug(f"Executing: {' '.join(full_cmd)}")

        try:
            result = subprocess.run(
                full_cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                text=True,
                timeout=self.timeout_seconds,
                encoding='utf-8',
                errors='ignore'
            )
        except subprocess.TimeoutExpired as e:
            raise InvocationTimeoutError(argv, f"timed out after {self.timeout_seconds}s") from e
        except (FileNotFoundError, PermissionError, OSError) as e:
            raise SpawnFailedError(argv, f"could not start: {e}") from e

        if result.returncode != 0:
            self.logger.debug(f"{' '.join(argv)} exited with {result.returncode}")

        if not result.stdout:
            raise EmptyOutputError(argv, "no output")

        # Trailing blank lines are dropped, but a lone newline is still one (blank) line
        output = result.stdout.rstrip('\r\n')

        # Older adbd pipes through a pty and terminates lines with \r\n
        return [line.rstrip('\r') for line in output.split('\n')]


class LocalProcessInvoker(ProcessInvoker):
    """Runs inspection commands on the machine Python is running on."""

    def build_command(self, argv: Sequence[str]) -> List[str]:
        return list(argv)


class AdbShellInvoker(ProcessInvoker):
    """Runs inspection commands through `adb -s <serial> shell`."""

    def __init__(self, device_serial: str, adb_command: str = "adb", timeout_seconds: Optional[float] = 10.0):
        super().__init__(timeout_seconds=timeout_seconds)
        if not device_serial:
            raise ValueError("Device serial cannot be empty")
        self.device_serial = device_serial
        self.adb_command = adb_command

    def build_command(self, argv: Sequence[str]) -> List[str]:
        # adb joins the remaining arguments into one line for the device shell
        return [self.adb_command, '-s', self.device_serial, 'shell', *argv]
