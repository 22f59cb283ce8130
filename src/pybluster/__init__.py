"""pybluster - Mirror a Nagios object cache into Redis and read it back."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pybluster")
except PackageNotFoundError:
    __version__ = "0+local"
from pybluster.client import Bluster
from pybluster.config import BlusterConfig, parse_server_address
from pybluster.exceptions import (
    BlusterConfigError,
    BlusterError,
    BlusterStoreError,
    ObjectCacheNotFound,
    StoreConnectionError,
)
from pybluster.models import ObjectRecord, ObjectSet, SyncStatus

__all__ = [
    "__version__",
    "Bluster",
    "BlusterConfig",
    "BlusterConfigError",
    "BlusterError",
    "BlusterStoreError",
    "ObjectCacheNotFound",
    "ObjectRecord",
    "ObjectSet",
    "StoreConnectionError",
    "SyncStatus",
    "parse_server_address",
]
