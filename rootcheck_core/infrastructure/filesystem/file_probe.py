"""
Filesystem existence queries against the inspected host.
"""

import logging
import os
from abc import ABC, abstractmethod

from ..process.process_invoker import ProcessInvoker, InvocationError


class FileProbe(ABC):
    """Answers "does this path exist on the host?"."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        pass


class LocalFileProbe(FileProbe):
    """Checks paths on the machine Python is running on."""

    def exists(self, path: str) -> bool:
        try:
            return os.path.exists(path)
        except (OSError, ValueError):
            return False


class ShellFileProbe(FileProbe):
    """
    Checks paths through the host shell.

    Used for ADB targets, where the filesystem is only reachable through
    `adb shell`. A missing path produces no output, which the invoker
    reports as an EmptyOutputError; both that and any other invocation
    failure count as "does not exist".
    """

    MARKER = "exists"

    def __init__(self, invoker: ProcessInvoker):
        self.invoker = invoker
        self.logger = logging.getLogger("filesystem.probe")

    def exists(self, path: str) -> bool:
        try:
            lines = self.invoker.run(['test', '-e', path, '&&', 'echo', self.MARKER])
        except InvocationError as e:
            self.logger.debug(f"{path}: {e}")
            return False
        return any(line.strip() == self.MARKER for line in lines)
