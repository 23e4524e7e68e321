"""
Binary presence checks.
"""

from .path_probe import PathProbe, CandidatePathSet
from .su_locator import SuLocator

__all__ = [
    'PathProbe',
    'CandidatePathSet',
    'SuLocator',
]
