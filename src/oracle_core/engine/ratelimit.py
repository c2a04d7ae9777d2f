"""Per-client sliding-window rate limiter."""

from __future__ import annotations

import threading
import time
from collections import deque


class RateLimiter:
    """Admits at most ``quota`` calls per client within any trailing ``window_seconds``.

    Rejected calls are not recorded. State is in-process only.
    """

    def __init__(self, quota: int = 30, window_seconds: float = 3600.0) -> None:
        self.quota = quota
        self.window_seconds = window_seconds
        self._calls: dict[str, deque[float]] = {}
        self._lock = threading.Lock()

    def admit(self, client_id: str) -> bool:
        """Record and accept a call for *client_id*, or reject it if over quota."""
        now = time.monotonic()
        cutoff = now - self.window_seconds
        with self._lock:
            calls = self._calls.setdefault(client_id, deque())
            while calls and calls[0] <= cutoff:
                calls.popleft()
            if len(calls) >= self.quota:
                return False
            calls.append(now)
            return True

    def remaining(self, client_id: str) -> int:
        """Calls *client_id* may still make in the current window."""
        cutoff = time.monotonic() - self.window_seconds
        with self._lock:
            calls = self._calls.get(client_id)
            if not calls:
                return self.quota
            live = sum(1 for t in calls if t > cutoff)
            return max(self.quota - live, 0)
