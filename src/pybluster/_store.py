"""Redis store adapter."""

from __future__ import annotations

import logging
from typing import Protocol

import redis
from redis import Redis

from pybluster.config import BlusterConfig
from pybluster.exceptions import BlusterStoreError, StoreConnectionError

_logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Structural store interface used by the sync and query layers.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`RedisStore`) concrete.
    """

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def keys(self, pattern: str) -> list[str]: ...

    def delete(self, *keys: str) -> int: ...


def _wrap(exc: redis.RedisError, action: str, key: str) -> BlusterStoreError:
    if isinstance(exc, (redis.ConnectionError, redis.TimeoutError)):
        return StoreConnectionError(f"Unable to connect to redis during {action}: {exc}", key=key)
    return BlusterStoreError(f"Redis {action} failed for {key!r}: {exc}", key=key)


class RedisStore:
    """`KeyValueStore` backed by a redis-py client.

    All ``redis`` exceptions are translated to :class:`BlusterStoreError`
    (or :class:`StoreConnectionError` when the server is unreachable).
    """

    def __init__(self, client: Redis) -> None:
        self._client = client

    @classmethod
    def connect(cls, config: BlusterConfig) -> RedisStore:
        """Open a connection and verify the server answers ``PING``."""
        client = Redis(
            host=config.host,
            port=config.port,
            db=config.db,
            password=config.password,
            socket_timeout=config.socket_timeout,
            socket_connect_timeout=config.socket_timeout,
            decode_responses=True,
        )
        store = cls(client)
        store.ping()
        return store

    def ping(self) -> None:
        _logger.debug("PING %s", self._client)
        try:
            self._client.ping()
        except (redis.ConnectionError, redis.TimeoutError) as exc:
            raise StoreConnectionError("Unable to connect to redis") from exc
        except redis.RedisError as exc:
            raise _wrap(exc, "ping", "") from exc

    def get(self, key: str) -> str | None:
        try:
            value = self._client.get(key)
        except redis.RedisError as exc:
            raise _wrap(exc, "get", key) from exc
        if isinstance(value, bytes):
            return value.decode("utf-8", errors="replace")
        return value

    def set(self, key: str, value: str) -> None:
        try:
            self._client.set(key, value)
        except redis.RedisError as exc:
            raise _wrap(exc, "set", key) from exc

    def keys(self, pattern: str) -> list[str]:
        try:
            found = self._client.keys(pattern)
        except redis.RedisError as exc:
            raise _wrap(exc, "keys", pattern) from exc
        return [k.decode("utf-8", errors="replace") if isinstance(k, bytes) else k for k in found]

    def delete(self, *keys: str) -> int:
        if not keys:
            return 0
        try:
            return int(self._client.delete(*keys))
        except redis.RedisError as exc:
            raise _wrap(exc, "delete", keys[0]) from exc

    def close(self) -> None:
        try:
            self._client.close()
        except redis.RedisError:
            _logger.debug("Error closing redis client", exc_info=True)
