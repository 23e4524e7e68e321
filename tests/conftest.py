"""Shared pytest fixtures and in-memory host collaborators."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Union

import pytest

from rootcheck_core.logic.models import DetectionConfig
from rootcheck_core.infrastructure.device import HostEnvironment
from rootcheck_core.infrastructure.filesystem import FileProbe
from rootcheck_core.infrastructure.logging import EvidenceSink
from rootcheck_core.infrastructure.native import NativeBridge, NativeUnavailableError
from rootcheck_core.infrastructure.packages import StaticPackageRegistry
from rootcheck_core.infrastructure.process import ProcessInvoker, SpawnFailedError, EmptyOutputError
from rootcheck_core.infrastructure.shared import get_error_service


Output = Union[List[str], Exception]


class FakeInvoker(ProcessInvoker):
    """Answers commands from a table; unknown commands fail to spawn."""

    def __init__(self, outputs: Optional[Dict[Tuple[str, ...], Output]] = None):
        super().__init__(timeout_seconds=1)
        self.outputs = dict(outputs or {})
        self.calls: List[Tuple[str, ...]] = []

    def build_command(self, argv: Sequence[str]) -> List[str]:
        return list(argv)

    def run(self, argv: Sequence[str]) -> List[str]:
        key = tuple(argv)
        self.calls.append(key)
        if key not in self.outputs:
            raise SpawnFailedError(argv, "not found")
        output = self.outputs[key]
        if isinstance(output, Exception):
            raise output
        if not output:
            raise EmptyOutputError(argv, "no output")
        return list(output)


class FakeFileProbe(FileProbe):
    def __init__(self, existing: Iterable[str] = ()):
        self.existing = set(existing)
        self.probed: List[str] = []

    def exists(self, path: str) -> bool:
        self.probed.append(path)
        return path in self.existing


class FakeNativeBridge(NativeBridge):
    def __init__(self, loaded: bool = True, hits: int = 0, readable: bool = True, link_error: bool = False):
        self.loaded = loaded
        self.hits = hits
        self.readable = readable
        self.link_error = link_error
        self.scanned: List[List[str]] = []
        self.log_flags: List[bool] = []

    def is_loaded(self) -> bool:
        return self.loaded

    def deep_scan(self, candidate_paths: Sequence[str], log_debug_messages: bool = False) -> int:
        self.log_flags.append(log_debug_messages)
        if self.link_error:
            raise NativeUnavailableError("checkForRoot not linkable")
        self.scanned.append(list(candidate_paths))
        return self.hits

    def probe_read_access(self, log_debug_messages: bool = False) -> bool:
        self.log_flags.append(log_debug_messages)
        return self.readable


class RecordingSink(EvidenceSink):
    def __init__(self):
        self.records: List[Tuple[str, str]] = []

    def emit(self, signal: str, message: str, level: int = logging.INFO) -> None:
        self.records.append((signal, message))

    def signals(self) -> List[str]:
        return [signal for signal, _ in self.records]


CLEAN_PROPS = [
    "[ro.build.tags]: [release-keys]",
    "[ro.debuggable]: [0]",
    "[ro.secure]: [1]",
]

CLEAN_MOUNTS = [
    "/dev/block/dm-0 on / type ext4 (ro,seclabel,relatime)",
    "/dev/block/dm-1 on /system type ext4 (ro,seclabel,relatime)",
    "tmpfs on /dev type tmpfs (rw,seclabel,nosuid,relatime,mode=755)",
]


def make_host(outputs: Optional[Dict[Tuple[str, ...], Output]] = None,
              existing: Iterable[str] = (),
              installed: Iterable[str] = (),
              native: Optional[NativeBridge] = None,
              sdk_version: Optional[int] = 30,
              build_tags: Optional[str] = "release-keys",
              path_env: Optional[str] = None) -> HostEnvironment:
    """A host that looks clean unless told otherwise."""
    table = {
        ("getprop",): CLEAN_PROPS,
        ("mount",): CLEAN_MOUNTS,
        ("which", "su"): [],
    }
    table.update(outputs or {})

    return HostEnvironment(
        name="fake",
        invoker=FakeInvoker(table),
        file_probe=FakeFileProbe(existing),
        package_registry=StaticPackageRegistry(installed),
        native_bridge=native or FakeNativeBridge(loaded=False),
        sdk_version=sdk_version,
        build_tags=build_tags,
        path_env=path_env,
    )


@pytest.fixture
def config() -> DetectionConfig:
    return DetectionConfig(include_path_env=False)


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture(autouse=True)
def reset_error_stats():
    get_error_service().reset_error_stats()
    yield
    get_error_service().reset_error_stats()
