"""Shared single-slot TTL cache for the aggregated snapshot."""

from __future__ import annotations

import asyncio
import time
from collections.abc import Awaitable, Callable

from oracle_core.logging import get_logger
from oracle_core.models import Snapshot

log = get_logger(__name__)


class SnapshotCache:
    """Holds the most recent Snapshot; refreshes it at most once per TTL.

    Refreshes are single-flight: callers arriving while a refresh is running
    wait on the same lock and then read the freshly stored snapshot instead of
    starting their own fan-out.
    """

    def __init__(
        self,
        refresh: Callable[[], Awaitable[Snapshot]],
        ttl_seconds: float = 60.0,
    ) -> None:
        self._refresh = refresh
        self._ttl = ttl_seconds
        self._snapshot: Snapshot | None = None
        self._stored_at: float = 0.0
        self._lock = asyncio.Lock()

    def _fresh(self) -> Snapshot | None:
        if self._snapshot is None:
            return None
        if time.monotonic() - self._stored_at >= self._ttl:
            return None
        return self._snapshot

    async def get(self) -> Snapshot:
        """Return the cached snapshot, running one aggregation cycle if expired."""
        snapshot = self._fresh()
        if snapshot is not None:
            return snapshot

        async with self._lock:
            snapshot = self._fresh()
            if snapshot is not None:
                return snapshot

            snapshot = await self._refresh()
            self._snapshot = snapshot
            self._stored_at = time.monotonic()
            log.info("snapshot_refreshed", timestamp=snapshot.timestamp, prices=len(snapshot.prices))
            return snapshot

    def age_seconds(self) -> int | None:
        """Whole seconds since the slot was last filled, or None if never filled."""
        if self._snapshot is None:
            return None
        return int(time.monotonic() - self._stored_at)

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next ``get`` refreshes."""
        self._snapshot = None
        self._stored_at = 0.0
