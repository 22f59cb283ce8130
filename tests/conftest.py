from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

import fakeredis
import pytest

from pybluster._store import RedisStore
from pybluster.exceptions import BlusterStoreError


class CountingStore(RedisStore):
    """RedisStore that records every key it sets."""

    def __init__(self, client: fakeredis.FakeRedis) -> None:
        super().__init__(client)
        self.sets: list[str] = []

    def set(self, key: str, value: str) -> None:
        self.sets.append(key)
        super().set(key, value)


class FailingStore(CountingStore):
    """Raises on the N-th ``set`` call (1-based)."""

    def __init__(self, client: fakeredis.FakeRedis, fail_on: int) -> None:
        super().__init__(client)
        self._fail_on = fail_on

    def set(self, key: str, value: str) -> None:
        if len(self.sets) + 1 == self._fail_on:
            self.sets.append(key)
            raise BlusterStoreError(f"boom on {key}", key=key)
        super().set(key, value)


@pytest.fixture
def server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest.fixture
def redis_client(server: fakeredis.FakeServer) -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(server=server, decode_responses=True)


@pytest.fixture
def store(redis_client: fakeredis.FakeRedis) -> CountingStore:
    return CountingStore(redis_client)


@pytest.fixture
def write_cache(tmp_path: Path) -> Callable[..., Path]:
    """Write an object cache file and pin its mtime."""
    path = tmp_path / "objects.cache"

    def _write(text: str, mtime: int = 1_700_000_000) -> Path:
        path.write_text(text, encoding="utf-8")
        os.utime(path, (mtime, mtime))
        return path

    return _write


@pytest.fixture
def failing_store(redis_client: fakeredis.FakeRedis) -> Callable[[int], FailingStore]:
    def _make(fail_on: int) -> FailingStore:
        return FailingStore(redis_client, fail_on)

    return _make
