"""
Writable system mount detection.

With root, system directories can be remounted read-write. This check reads
the mount table and flags sensitive mount points carrying the `rw` option.

The `mount` output format changed after Android 6.0 (Marshmallow).

Android 6.0 and below:

    <fs_spec_path> <fs_file> <fs_spec> <fs_mntopts>
    /dev/block/x /system yaffs2 rw,relatime

Above Android 6.0:

    <fs_spec> on <fs_file> type <fs_vfs_type> (<fs_mntopts>)
    /dev/block/x on /system type ext4 (ro,seclabel,relatime)

The format is chosen from the host's SDK level, never sniffed from the text.
"""

from dataclasses import dataclass
from enum import Enum
from typing import FrozenSet, List, Optional, Sequence, Tuple, Union

from rootcheck_core.logic.models import SignalResult
from ..base import BaseCheck


class MountLineFormat(Enum):
    """Field layout of one mount line: (min fields, mount point, options, parenthesized)."""
    LEGACY = (4, 1, 3, False)
    MODERN = (6, 2, 5, True)

    def __init__(self, min_fields: int, mount_point_index: int, options_index: int, parenthesized: bool):
        self.min_fields = min_fields
        self.mount_point_index = mount_point_index
        self.options_index = options_index
        self.parenthesized = parenthesized

    @classmethod
    def for_sdk(cls, sdk_version: Optional[int], legacy_threshold: int) -> 'MountLineFormat':
        """Legacy at or below the threshold; unknown SDK levels read as modern."""
        if sdk_version is not None and sdk_version <= legacy_threshold:
            return cls.LEGACY
        return cls.MODERN


@dataclass(frozen=True)
class MountEntry:
    """Mount point and options parsed from one line."""
    mount_point: str
    options: FrozenSet[str]
    line: str

    @property
    def is_read_write(self) -> bool:
        return any(option.lower() == "rw" for option in self.options)


@dataclass(frozen=True)
class ParseSkip:
    """A malformed line that was skipped; not fatal, just no evidence."""
    line: str
    reason: str


def parse_mount_line(line: str, line_format: MountLineFormat) -> Union[MountEntry, ParseSkip]:
    """Parse one mount line. Never raises."""
    args = line.split(' ')

    if len(args) < line_format.min_fields:
        return ParseSkip(line, f"expected at least {line_format.min_fields} fields, got {len(args)}")

    mount_point = args[line_format.mount_point_index]
    options = args[line_format.options_index]

    if line_format.parenthesized:
        options = options.replace('(', '').replace(')', '')

    return MountEntry(mount_point=mount_point, options=frozenset(options.split(',')), line=line)


def parse_mount_table(lines: Sequence[str],
                      line_format: MountLineFormat) -> Tuple[List[MountEntry], List[ParseSkip]]:
    """Parse a full mount dump into entries and skipped lines."""
    entries, skipped = [], []
    for line in lines:
        parsed = parse_mount_line(line, line_format)
        if isinstance(parsed, ParseSkip):
            skipped.append(parsed)
        else:
            entries.append(parsed)
    return entries, skipped


class MountTableParser(BaseCheck):
    """Flags sensitive paths mounted read-write."""

    @property
    def name(self) -> str:
        return "rw_paths"

    @property
    def description(self) -> str:
        return "Checks whether system directories are mounted read-write"

    @property
    def line_format(self) -> MountLineFormat:
        return MountLineFormat.for_sdk(self.host.sdk_version, self.config.legacy_mount_sdk_threshold)

    def check_for_rw_paths(self) -> SignalResult:
        """
        Raises:
            InvocationError: the mount table could not be read
        """
        lines = self.host.invoker.run(self.config.mount_command)
        return self.scan_lines(lines)

    def scan_lines(self, lines: Sequence[str]) -> SignalResult:
        """Evaluate every line; the result is the OR over all of them."""
        entries, skipped = parse_mount_table(lines, self.line_format)

        for skip in skipped:
            self.logger.warning(f"Error formatting mount line: {skip.line} ({skip.reason})")

        sensitive_paths = [path.lower() for path in self.config.paths_that_should_not_be_writable]

        hits = []
        for entry in entries:
            if entry.mount_point.lower() in sensitive_paths and entry.is_read_write:
                self.emit(f"{entry.mount_point} path is mounted with rw permissions! {entry.line}")
                hits.append(entry.line)

        return SignalResult.from_evidence(hits)
