"""
rootcheck-core: heuristic root detection for Android hosts.

Gives an *indication* of whether a host has been rooted. There is no
100% way to check for root: every signal can be cloaked.
"""

__version__ = "0.3.0"
