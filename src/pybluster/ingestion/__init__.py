"""Ingestion layer.

This package turns the object cache file into parsed records and writes
them into the key-value store.
"""

from pybluster.ingestion.parser import parse_object_cache, read_object_cache
from pybluster.ingestion.projection import project_objects, projected_keys, prune_orphans

__all__ = [
    "parse_object_cache",
    "project_objects",
    "projected_keys",
    "prune_orphans",
    "read_object_cache",
]
