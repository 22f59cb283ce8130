"""Sync state layer.

The stored sync marker is the single source of truth for whether the
projected objects match the object cache file.
"""

from pybluster.state.policy import needs_sync, parse_marker
from pybluster.state.sync import Synchronizer

__all__ = [
    "Synchronizer",
    "needs_sync",
    "parse_marker",
]
