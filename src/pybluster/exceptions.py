"""Custom exception hierarchy for pybluster."""

from __future__ import annotations


class BlusterError(Exception):
    """Base exception for all pybluster errors."""


class BlusterConfigError(BlusterError):
    """Invalid or missing configuration."""


class ObjectCacheNotFound(BlusterError):
    """The Nagios objects.cache file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Object cache not found at {path}")


class BlusterStoreError(BlusterError):
    """A key-value store operation failed.

    The underlying ``redis`` exception is always chained as ``__cause__``.
    """

    def __init__(self, message: str, *, key: str = "") -> None:
        self.key = key
        super().__init__(message)


class StoreConnectionError(BlusterStoreError):
    """The key-value store could not be reached (refused, timed out)."""
