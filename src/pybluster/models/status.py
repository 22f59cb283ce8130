"""Synchronization status model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class SyncStatus(BaseModel):
    """Snapshot of the stored sync marker against the object cache file."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    marker: int | None
    """Modification time recorded by the last successful sync."""
    source_mtime: int
    """Current modification time of the object cache (epoch seconds)."""
    stale: bool
    """Whether the next read will trigger a sync."""
