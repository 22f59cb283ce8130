"""Staleness-checked synchronization of the object cache into the store."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from pybluster._constants import DEFAULT_NAMESPACE, DEFAULT_OBJECT_TYPES
from pybluster._keys import sync_marker_key
from pybluster._store import KeyValueStore
from pybluster.exceptions import ObjectCacheNotFound
from pybluster.ingestion.parser import read_object_cache
from pybluster.ingestion.projection import project_objects, prune_orphans
from pybluster.models.status import SyncStatus
from pybluster.state.policy import needs_sync, parse_marker

_logger = logging.getLogger(__name__)


class Synchronizer:
    """Keeps the projected objects in *store* in step with one object cache file.

    The sync marker is written only after every projection write has
    succeeded, so a failed sync leaves the previous marker in place and
    the next :meth:`ensure_fresh` retries from scratch.

    There is no locking: two processes that see a stale marker at the same
    time both sync, which is harmless because every write is an overwrite.
    """

    def __init__(
        self,
        store: KeyValueStore,
        objects_path: str | os.PathLike[str],
        *,
        namespace: str = DEFAULT_NAMESPACE,
        object_types: Mapping[str, str] | None = None,
        prune: bool = False,
    ) -> None:
        self._store = store
        self._objects_path = os.fspath(objects_path)
        self._namespace = namespace
        self._object_types = dict(object_types if object_types is not None else DEFAULT_OBJECT_TYPES)
        self._prune = prune
        self._marker_key = sync_marker_key(namespace).encode()

    @property
    def objects_path(self) -> str:
        return self._objects_path

    @property
    def namespace(self) -> str:
        return self._namespace

    @property
    def object_types(self) -> dict[str, str]:
        return dict(self._object_types)

    def source_mtime(self) -> int:
        """Modification time of the object cache, truncated to whole seconds."""
        try:
            return int(os.stat(self._objects_path).st_mtime)
        except FileNotFoundError as exc:
            raise ObjectCacheNotFound(self._objects_path) from exc

    def read_marker(self) -> int | None:
        return parse_marker(self._store.get(self._marker_key))

    def status(self) -> SyncStatus:
        marker = self.read_marker()
        mtime = self.source_mtime()
        return SyncStatus(marker=marker, source_mtime=mtime, stale=needs_sync(marker, mtime))

    def is_stale(self) -> bool:
        return self.status().stale

    def ensure_fresh(self) -> bool:
        """Sync if the stored marker differs from the file; return whether a sync ran."""
        status = self.status()
        if not status.stale:
            return False
        _logger.info(
            "Object cache %s changed (marker=%s, mtime=%s), syncing",
            self._objects_path,
            status.marker,
            status.source_mtime,
        )
        self.sync()
        return True

    def sync(self) -> int:
        """Parse the object cache and rewrite every configured type.

        The marker records the modification time seen before the file was
        read, so a write to the file during the sync is picked up by the
        next check.  Returns the number of attribute keys written.
        """
        mtime = self.source_mtime()
        try:
            objects = read_object_cache(self._objects_path)
        except FileNotFoundError as exc:
            raise ObjectCacheNotFound(self._objects_path) from exc

        written = project_objects(
            self._store,
            objects,
            namespace=self._namespace,
            object_types=self._object_types,
        )
        if self._prune:
            prune_orphans(
                self._store,
                objects,
                namespace=self._namespace,
                object_types=self._object_types,
            )

        self._store.set(self._marker_key, str(mtime))
        _logger.debug("Sync complete: %d key(s), marker=%d", written, mtime)
        return written
