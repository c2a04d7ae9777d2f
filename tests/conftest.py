"""Shared test fixtures: a canned upstream served through httpx.MockTransport."""

from __future__ import annotations

import asyncio
from collections import Counter

import httpx
import pytest

from oracle_core.config.schema import AppConfig, ProviderConfig
from oracle_core.providers import build_providers

COINGECKO_BODY = {
    "bitcoin": {"usd": 67000, "usd_24h_change": -2.3, "usd_market_cap": 1.3e12},
    "ethereum": {"usd": 2000, "usd_24h_change": -1.5, "usd_market_cap": 2.4e11},
    "solana": {"usd": 100, "usd_24h_change": 5.0, "usd_market_cap": 4e10},
    "cardano": {"usd": 0.45, "usd_24h_change": 1.0, "usd_market_cap": 1.5e10},
}

DEFILLAMA_BODY = {
    "coins": {
        "coingecko:bitcoin": {"price": 67005, "confidence": 0.99},
        "coingecko:ethereum": {"price": 2020, "confidence": 0.99},
        "coingecko:solana": {"price": 105, "confidence": 0.95},
    }
}

FEAR_GREED_BODY = {
    "data": [
        {"value": "72", "value_classification": "Greed", "timestamp": "1760572800"},
    ]
}

CHAINS_BODY = [{"name": f"Chain{i}", "tvl": float(i * 1_000_000)} for i in range(1, 21)]

STABLECOINS_BODY = {
    "peggedAssets": [
        {
            "name": f"Stable{i}",
            "symbol": f"S{i}",
            "circulating": {"peggedUSD": float(i * 1_000_000)},
            "price": 1.0,
        }
        for i in range(1, 13)
    ]
}

GAS_BODY = {
    "status": "1",
    "message": "OK",
    "result": {"SafeGasPrice": "12", "ProposeGasPrice": "15", "FastGasPrice": "20"},
}

ROUTES = {
    "api.coingecko.com": COINGECKO_BODY,
    "coins.llama.fi": DEFILLAMA_BODY,
    "api.alternative.me": FEAR_GREED_BODY,
    "api.llama.fi": CHAINS_BODY,
    "stablecoins.llama.fi": STABLECOINS_BODY,
    "api.etherscan.io": GAS_BODY,
}


class FakeUpstream:
    """Serves canned provider payloads keyed by host and counts calls per host.

    Hosts listed in ``failing`` answer 500; ``bodies`` overrides a host's payload
    (``bytes`` bodies are sent verbatim).
    """

    def __init__(self) -> None:
        self.calls: Counter[str] = Counter()
        self.requests: list[httpx.Request] = []
        self.failing: set[str] = set()
        self.bodies: dict[str, object] = dict(ROUTES)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        host = request.url.host
        self.calls[host] += 1
        self.requests.append(request)
        if host in self.failing:
            return httpx.Response(500, json={"error": "upstream down"})
        if host not in self.bodies:
            return httpx.Response(404)
        body = self.bodies[host]
        if isinstance(body, bytes):
            return httpx.Response(200, content=body)
        return httpx.Response(200, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def providers(upstream):
    provider_set = build_providers(ProviderConfig(), transport=upstream.transport())
    yield provider_set
    asyncio.run(provider_set.close())


@pytest.fixture
def app_config():
    cfg = AppConfig(assets=["BTC", "ETH", "SOL", "ADA"])
    cfg.rate_limit.quota = 100
    return cfg
