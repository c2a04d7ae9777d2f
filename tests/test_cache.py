"""Tests for the shared snapshot cache."""

from __future__ import annotations

import asyncio
from unittest.mock import patch

import pytest

from oracle_core.engine.cache import SnapshotCache
from oracle_core.models import Snapshot


class CountingRefresh:
    """Refresh callable that builds a distinct snapshot per call."""

    def __init__(self, delay: float = 0.0) -> None:
        self.calls = 0
        self.delay = delay

    async def __call__(self) -> Snapshot:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        return Snapshot(
            timestamp=1760572800 + self.calls,
            iso="2025-10-16T00:00:00.000Z",
            oracle="test",
        )


class TestSnapshotCache:
    def test_first_get_refreshes(self):
        refresh = CountingRefresh()
        cache = SnapshotCache(refresh, ttl_seconds=60)
        snap = asyncio.run(cache.get())
        assert refresh.calls == 1
        assert snap.timestamp == 1760572801

    def test_within_ttl_returns_same_instance(self):
        refresh = CountingRefresh()
        cache = SnapshotCache(refresh, ttl_seconds=60)

        async def twice():
            return await cache.get(), await cache.get()

        first, second = asyncio.run(twice())
        assert first is second
        assert first.to_wire() == second.to_wire()
        assert refresh.calls == 1

    def test_expiry_triggers_exactly_one_refresh(self):
        refresh = CountingRefresh()
        cache = SnapshotCache(refresh, ttl_seconds=60)

        with patch("oracle_core.engine.cache.time") as mock_time:
            mock_time.monotonic.return_value = 1000.0
            asyncio.run(cache.get())

            mock_time.monotonic.return_value = 1059.9
            asyncio.run(cache.get())
            assert refresh.calls == 1

            mock_time.monotonic.return_value = 1060.0
            snap = asyncio.run(cache.get())
            assert refresh.calls == 2
            assert snap.timestamp == 1760572802

            mock_time.monotonic.return_value = 1070.0
            asyncio.run(cache.get())
            assert refresh.calls == 2

    def test_concurrent_callers_share_one_refresh(self):
        refresh = CountingRefresh(delay=0.05)
        cache = SnapshotCache(refresh, ttl_seconds=60)

        async def burst():
            return await asyncio.gather(*(cache.get() for _ in range(10)))

        results = asyncio.run(burst())
        assert refresh.calls == 1
        assert all(r is results[0] for r in results)

    def test_age_none_until_populated(self):
        cache = SnapshotCache(CountingRefresh(), ttl_seconds=60)
        assert cache.age_seconds() is None

    def test_age_in_whole_seconds(self):
        cache = SnapshotCache(CountingRefresh(), ttl_seconds=60)
        with patch("oracle_core.engine.cache.time") as mock_time:
            mock_time.monotonic.return_value = 500.0
            asyncio.run(cache.get())
            mock_time.monotonic.return_value = 512.7
            assert cache.age_seconds() == 12

    def test_invalidate_forces_refresh(self):
        refresh = CountingRefresh()
        cache = SnapshotCache(refresh, ttl_seconds=60)
        asyncio.run(cache.get())
        cache.invalidate()
        assert cache.age_seconds() is None
        asyncio.run(cache.get())
        assert refresh.calls == 2

    def test_failed_refresh_propagates_and_keeps_slot_empty(self):
        async def boom() -> Snapshot:
            raise RuntimeError("reconciliation bug")

        cache = SnapshotCache(boom, ttl_seconds=60)
        with pytest.raises(RuntimeError):
            asyncio.run(cache.get())
        assert cache.age_seconds() is None
