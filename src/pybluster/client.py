"""High-level read client for Nagios objects mirrored in Redis."""

from __future__ import annotations

import logging
import os
from typing import Any

from pybluster._constants import DEFAULT_SERVER
from pybluster._keys import StoreKey, object_key, type_key
from pybluster._store import KeyValueStore, RedisStore
from pybluster.config import BlusterConfig
from pybluster.exceptions import ObjectCacheNotFound
from pybluster.models.status import SyncStatus
from pybluster.state.sync import Synchronizer

_logger = logging.getLogger(__name__)


class Bluster:
    """Read access to the objects of a Nagios ``objects.cache`` through Redis.

    Every read first compares the stored sync marker with the file's
    modification time and re-syncs the whole file when they differ.

    Usage::

        with Bluster("/var/cache/nagios3/objects.cache", "localhost:6379") as bluster:
            for name in bluster.contacts():
                print(name, bluster.get_contact(name))
    """

    def __init__(
        self,
        objects_path: str | os.PathLike[str] | None = None,
        server: str = DEFAULT_SERVER,
        *,
        config: BlusterConfig | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        if config is None:
            if objects_path is None:
                raise TypeError("Bluster() needs objects_path or config")
            config = BlusterConfig(objects_path=os.fspath(objects_path), server=server)
        self._config = config

        if not os.path.exists(config.objects_path):
            raise ObjectCacheNotFound(config.objects_path)

        self._owns_store = store is None
        self._store: KeyValueStore = store if store is not None else RedisStore.connect(config)
        self._sync = Synchronizer(
            self._store,
            config.objects_path,
            namespace=config.namespace,
            object_types=config.object_types,
            prune=config.prune_orphans,
        )
        _logger.debug("Serving %s from namespace %r", config.objects_path, config.namespace)
        self._sync.ensure_fresh()

    @classmethod
    def from_config(cls, config: BlusterConfig, *, store: KeyValueStore | None = None) -> Bluster:
        return cls(config=config, store=store)

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    def __enter__(self) -> Bluster:
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the Redis connection if this instance opened it."""
        if self._owns_store and isinstance(self._store, RedisStore):
            self._store.close()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> BlusterConfig:
        return self._config

    @property
    def store(self) -> KeyValueStore:
        return self._store

    # ------------------------------------------------------------------
    # Sync control
    # ------------------------------------------------------------------

    def refresh(self, force: bool = True) -> None:
        if force:
            self._sync.sync()
            return
        self._sync.ensure_fresh()

    def sync_status(self) -> SyncStatus:
        """Compare the stored marker with the file without syncing."""
        return self._sync.status()

    # ------------------------------------------------------------------
    # Generic reads
    # ------------------------------------------------------------------

    def objects(self, object_type: str) -> list[str]:
        """Distinct names of stored objects of *object_type* (unordered)."""
        self._sync.ensure_fresh()
        prefix = type_key(self._config.namespace, object_type)
        names: dict[str, None] = {}
        for raw in self._store.keys(prefix.pattern()):
            key = StoreKey.decode(raw)
            if prefix.is_prefix_of(key):
                names[key.segments[len(prefix.segments)]] = None
        return list(names)

    def get_object(self, object_type: str, name: str) -> dict[str, str]:
        """Attributes of one stored object, without its name attribute.

        Returns an empty dict for an unknown object.
        """
        self._sync.ensure_fresh()
        prefix = object_key(self._config.namespace, object_type, name)
        data: dict[str, str] = {}
        for raw in self._store.keys(prefix.pattern()):
            key = StoreKey.decode(raw)
            if not prefix.is_prefix_of(key):
                continue
            value = self._store.get(raw)
            # Deleted between KEYS and GET.
            if value is None:
                continue
            data[key.segments[len(prefix.segments)]] = value
        return data

    # ------------------------------------------------------------------
    # Typed shortcuts
    # ------------------------------------------------------------------

    def contacts(self) -> list[str]:
        return self.objects("contact")

    def get_contact(self, contact: str) -> dict[str, str]:
        return self.get_object("contact", contact)

    def commands(self) -> list[str]:
        return self.objects("command")

    def get_command(self, command: str) -> dict[str, str]:
        return self.get_object("command", command)
