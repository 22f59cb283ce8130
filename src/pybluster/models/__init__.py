"""Data models for parsed objects and sync state."""

from pybluster.models.objects import ObjectRecord, ObjectSet
from pybluster.models.status import SyncStatus

__all__ = [
    "ObjectRecord",
    "ObjectSet",
    "SyncStatus",
]
