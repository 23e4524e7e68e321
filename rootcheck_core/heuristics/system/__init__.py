"""
System configuration checks: properties, mounts and build signing.
"""

from .property_scanner import PropertyScanner
from .mount_table_parser import (
    MountTableParser,
    MountLineFormat,
    MountEntry,
    ParseSkip,
    parse_mount_line,
    parse_mount_table,
)
from .build_tags import BuildTagsCheck

__all__ = [
    'PropertyScanner',
    'MountTableParser',
    'MountLineFormat',
    'MountEntry',
    'ParseSkip',
    'parse_mount_line',
    'parse_mount_table',
    'BuildTagsCheck',
]
