"""Freshness policy.

This module only compares version tokens; it never touches the store or
the filesystem.
"""

from __future__ import annotations


def parse_marker(value: str | None) -> int | None:
    """Parse a stored sync marker; anything unparsable counts as missing."""
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def needs_sync(marker: int | None, source_mtime: int) -> bool:
    """Equality is the only state that skips a sync.

    A file touched back to an older time is stale too.
    """
    if marker is None:
        return True
    return marker != source_mtime
