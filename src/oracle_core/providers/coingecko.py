"""CoinGecko spot price adapter."""

from __future__ import annotations

import math

from oracle_core.models import SourceQuote
from oracle_core.providers.base import FETCH_ERRORS, ProviderClient
from oracle_core.providers.ids import COINGECKO_IDS, map_tickers


class CoinGeckoClient(ProviderClient):
    """Spot prices with 24h change and market cap from ``/simple/price``."""

    name = "coingecko"

    def __init__(self, base_url: str = "https://api.coingecko.com/api/v3", **kwargs):
        super().__init__(base_url, **kwargs)

    async def fetch_quotes(self, assets: list[str]) -> dict[str, SourceQuote]:
        """Return ``{ticker: SourceQuote}`` for every mapped ticker CoinGecko priced.

        Never raises: on any upstream failure the result is ``{}``.
        """
        mapped = map_tickers(assets, COINGECKO_IDS)
        if not mapped:
            return {}

        try:
            data = await self._get_json("/simple/price", params={
                "ids": ",".join(mapped.values()),
                "vs_currencies": "usd",
                "include_24hr_change": "true",
                "include_market_cap": "true",
            })
            return self.parse_quotes(data, mapped)
        except FETCH_ERRORS as exc:
            self._degraded(exc, assets=list(mapped))
            return {}

    @classmethod
    def parse_quotes(cls, data: dict, mapped: dict[str, str]) -> dict[str, SourceQuote]:
        """Normalize a ``/simple/price`` body; entries without a finite positive price are dropped."""
        quotes: dict[str, SourceQuote] = {}
        for ticker, gecko_id in mapped.items():
            entry = data.get(gecko_id)
            if not entry:
                continue
            price = entry.get("usd")
            if not isinstance(price, (int, float)) or not math.isfinite(price) or price <= 0:
                continue
            quotes[ticker] = SourceQuote(
                source=cls.name,
                price=float(price),
                change_24h=entry.get("usd_24h_change"),
                market_cap=entry.get("usd_market_cap"),
            )
        return quotes
