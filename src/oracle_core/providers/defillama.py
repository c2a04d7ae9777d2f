"""DeFiLlama adapters: coin prices, chain TVL, stablecoin supply.

DeFiLlama serves each dataset from a different host, so each gets its own
client with its own base URL.
"""

from __future__ import annotations

import math

from oracle_core.models import (
    ChainTvl,
    SourceQuote,
    Stablecoin,
    StablecoinRanking,
    TvlRanking,
)
from oracle_core.providers.base import FETCH_ERRORS, ProviderClient
from oracle_core.providers.ids import DEFILLAMA_IDS, map_tickers

TOP_CHAINS = 15
TOP_STABLECOINS = 10


class DefiLlamaPriceClient(ProviderClient):
    """Current coin prices from ``coins.llama.fi``."""

    name = "defillama"

    def __init__(self, base_url: str = "https://coins.llama.fi", **kwargs):
        super().__init__(base_url, **kwargs)

    async def fetch_quotes(self, assets: list[str]) -> dict[str, SourceQuote]:
        mapped = map_tickers(assets, DEFILLAMA_IDS)
        if not mapped:
            return {}

        try:
            data = await self._get_json(f"/prices/current/{','.join(mapped.values())}")
            return self.parse_quotes(data, mapped)
        except FETCH_ERRORS as exc:
            self._degraded(exc, assets=list(mapped))
            return {}

    @classmethod
    def parse_quotes(cls, data: dict, mapped: dict[str, str]) -> dict[str, SourceQuote]:
        coins = data.get("coins") or {}
        quotes: dict[str, SourceQuote] = {}
        for ticker, llama_id in mapped.items():
            entry = coins.get(llama_id)
            if not entry:
                continue
            price = entry.get("price")
            if not isinstance(price, (int, float)) or not math.isfinite(price) or price <= 0:
                continue
            quotes[ticker] = SourceQuote(
                source=cls.name,
                price=float(price),
                confidence=entry.get("confidence") or 0.99,
            )
        return quotes


class DefiLlamaTvlClient(ProviderClient):
    """Per-chain TVL from ``api.llama.fi/v2/chains``."""

    name = "defillama_tvl"

    def __init__(self, base_url: str = "https://api.llama.fi", **kwargs):
        super().__init__(base_url, **kwargs)

    async def fetch(self) -> TvlRanking | None:
        try:
            data = await self._get_json("/v2/chains")
            return self.parse(data)
        except FETCH_ERRORS as exc:
            self._degraded(exc)
            return None

    @staticmethod
    def parse(data: list[dict]) -> TvlRanking:
        ranked = sorted(data, key=lambda c: c.get("tvl") or 0, reverse=True)
        return TvlRanking(chains=[
            ChainTvl(chain=c["name"], tvl=c.get("tvl") or 0)
            for c in ranked[:TOP_CHAINS]
        ])


class DefiLlamaStablecoinClient(ProviderClient):
    """Stablecoin circulating supply from ``stablecoins.llama.fi``."""

    name = "defillama_stablecoins"

    def __init__(self, base_url: str = "https://stablecoins.llama.fi", **kwargs):
        super().__init__(base_url, **kwargs)

    async def fetch(self) -> StablecoinRanking | None:
        try:
            data = await self._get_json("/stablecoins", params={"includePrices": "true"})
            return self.parse(data)
        except FETCH_ERRORS as exc:
            self._degraded(exc)
            return None

    @staticmethod
    def _circulating_usd(asset: dict) -> float:
        return (asset.get("circulating") or {}).get("peggedUSD") or 0

    @classmethod
    def parse(cls, data: dict) -> StablecoinRanking:
        ranked = sorted(data["peggedAssets"], key=cls._circulating_usd, reverse=True)
        return StablecoinRanking(stablecoins=[
            Stablecoin(
                name=s["name"],
                symbol=s["symbol"],
                circulating=cls._circulating_usd(s),
                price=s.get("price"),
            )
            for s in ranked[:TOP_STABLECOINS]
        ])
