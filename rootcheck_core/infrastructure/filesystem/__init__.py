"""
Filesystem existence probes.
"""

from .file_probe import FileProbe, LocalFileProbe, ShellFileProbe

__all__ = [
    'FileProbe',
    'LocalFileProbe',
    'ShellFileProbe',
]
