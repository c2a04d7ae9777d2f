"""alternative.me Crypto Fear & Greed index adapter."""

from __future__ import annotations

from oracle_core.models import FearGreed
from oracle_core.providers.base import FETCH_ERRORS, ProviderClient


class FearGreedClient(ProviderClient):
    name = "alternative.me"

    def __init__(self, base_url: str = "https://api.alternative.me", **kwargs):
        super().__init__(base_url, **kwargs)

    async def fetch(self) -> FearGreed | None:
        """Return the latest index reading, or None when unavailable."""
        try:
            data = await self._get_json("/fng/", params={"limit": 1})
            return self.parse(data)
        except FETCH_ERRORS as exc:
            self._degraded(exc)
            return None

    @classmethod
    def parse(cls, data: dict) -> FearGreed:
        latest = data["data"][0]
        return FearGreed(
            value=int(latest["value"]),
            label=latest["value_classification"],
            timestamp=int(latest["timestamp"]),
            source=cls.name,
        )
