"""Project parsed objects into the flat key-value namespace.

Every non-name attribute of a record becomes one key::

    <namespace>:objects:<type>:<name>:<attribute> -> <value>

Writes are plain overwrites.  Nothing is deleted unless
:func:`prune_orphans` is called explicitly, so objects removed from the
object cache stay in the store by default.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from pybluster._keys import StoreKey, attribute_key, type_key
from pybluster._store import KeyValueStore
from pybluster.models.objects import ObjectSet

_logger = logging.getLogger(__name__)


def projected_keys(objects: ObjectSet, *, namespace: str, object_types: Mapping[str, str]) -> dict[StoreKey, str]:
    """Keys and values that a projection of *objects* would write, in write order."""
    entries: dict[StoreKey, str] = {}
    for object_type, name_attribute in object_types.items():
        for record in objects.get(object_type, []):
            name = record.name(name_attribute)
            if name is None:
                _logger.debug("Skipping %s record without %s", object_type, name_attribute)
                continue
            for attribute, value in record.data(name_attribute).items():
                entries[attribute_key(namespace, object_type, name, attribute)] = value
    return entries


def project_objects(
    store: KeyValueStore,
    objects: ObjectSet,
    *,
    namespace: str,
    object_types: Mapping[str, str],
) -> int:
    """Write *objects* of the configured types to *store*.

    Types are written in the order of *object_types*.  Returns the number
    of keys written.
    """
    written = 0
    for key, value in projected_keys(objects, namespace=namespace, object_types=object_types).items():
        store.set(key.encode(), value)
        written += 1
    _logger.debug("Projected %d attribute key(s) under %s", written, namespace)
    return written


def prune_orphans(
    store: KeyValueStore,
    objects: ObjectSet,
    *,
    namespace: str,
    object_types: Mapping[str, str],
) -> int:
    """Delete stored attributes of the configured types that *objects* no longer has.

    Returns the number of keys deleted.
    """
    wanted = set(projected_keys(objects, namespace=namespace, object_types=object_types))
    stale: list[str] = []
    for object_type in object_types:
        for raw in store.keys(type_key(namespace, object_type).pattern()):
            if StoreKey.decode(raw) not in wanted:
                stale.append(raw)
    if not stale:
        return 0
    deleted = store.delete(*stale)
    _logger.debug("Pruned %d orphaned key(s) under %s", deleted, namespace)
    return deleted
