"""
Binary path probing.

Looks for well-known root binaries (su, busybox, magisk) in every candidate
directory. The scan never stops at the first hit: every hit is evidence,
even though only the boolean takes part in the verdict.
"""

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Tuple

from rootcheck_core.logic.models import SignalResult
from rootcheck_core.logic.constants import BINARY_SU, BINARY_BUSYBOX, BINARY_MAGISK
from ..base import BaseCheck


@dataclass(frozen=True)
class CandidatePathSet:
    """Ordered, read-only set of directories; every entry ends with '/'."""
    directories: Tuple[str, ...]

    @classmethod
    def build(cls, base_paths: Iterable[str], path_env: Optional[str] = None) -> 'CandidatePathSet':
        """
        Combine the static directory list with the host's PATH entries.

        Entries are normalized to a trailing '/', and the first occurrence of
        a directory wins.
        """
        directories: List[str] = []

        candidates = list(base_paths)
        if path_env:
            candidates.extend(entry for entry in path_env.split(':') if entry)

        for directory in candidates:
            directory = directory.strip()
            if not directory:
                continue
            if not directory.endswith('/'):
                directory += '/'
            if directory not in directories:
                directories.append(directory)

        return cls(tuple(directories))

    def __iter__(self) -> Iterator[str]:
        return iter(self.directories)

    def __len__(self) -> int:
        return len(self.directories)

    def extend(self, additional: Optional[Iterable[str]]) -> 'CandidatePathSet':
        """A new set with extra directories probed after the existing ones."""
        if not additional:
            return self
        return CandidatePathSet.build(list(self.directories) + list(additional))

    def full_paths(self, filename: str) -> List[str]:
        """Every candidate location for a file, in probing order."""
        return [directory + filename for directory in self.directories]


class PathProbe(BaseCheck):
    """Existence checks for root binaries across the candidate directories."""

    @property
    def name(self) -> str:
        return "path_probe"

    @property
    def description(self) -> str:
        return "Checks common locations for the su, busybox and magisk binaries"

    def candidate_paths(self) -> CandidatePathSet:
        path_env = self.host.path_env if self.config.include_path_env else None
        return CandidatePathSet.build(self.config.su_paths, path_env)

    def check_for_binary(self, filename: str, paths: Optional[CandidatePathSet] = None,
                         signal: Optional[str] = None) -> SignalResult:
        """
        Probe every candidate directory for a file.

        Args:
            filename: Binary name, e.g. "su"
            paths: Directories to probe (defaults to the configured set)
            signal: Signal name evidence is attributed to

        Returns:
            Positive iff at least one directory contains the file
        """
        paths = paths if paths is not None else self.candidate_paths()

        hits = []
        for complete_path in paths.full_paths(filename):
            if self.host.file_probe.exists(complete_path):
                self.emit(f"{complete_path} binary detected!", signal=signal)
                hits.append(complete_path)

        return SignalResult.from_evidence(hits)

    def check_for_su_binary(self) -> SignalResult:
        return self.check_for_binary(BINARY_SU, signal="su_binary")

    def check_for_busybox_binary(self) -> SignalResult:
        # Many manufacturers ship busybox on production devices
        return self.check_for_binary(BINARY_BUSYBOX, signal="busybox_binary")

    def check_for_magisk_binary(self) -> SignalResult:
        return self.check_for_binary(BINARY_MAGISK, signal="magisk_binary")
