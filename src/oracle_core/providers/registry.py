"""Wires the provider adapters from configuration."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass

import httpx

from oracle_core.config.schema import ProviderConfig
from oracle_core.providers.alternative import FearGreedClient
from oracle_core.providers.coingecko import CoinGeckoClient
from oracle_core.providers.defillama import (
    DefiLlamaPriceClient,
    DefiLlamaStablecoinClient,
    DefiLlamaTvlClient,
)
from oracle_core.providers.etherscan import GasClient


@dataclass
class ProviderSet:
    """Every adapter one aggregation cycle fans out to.

    ``primary`` and ``secondary`` are the two independent price sources; their
    order is the order sources are recorded in a reconciled price.
    """

    primary: CoinGeckoClient
    secondary: DefiLlamaPriceClient
    fear_greed: FearGreedClient
    tvl: DefiLlamaTvlClient
    stablecoins: DefiLlamaStablecoinClient
    gas: GasClient

    async def close(self) -> None:
        await asyncio.gather(
            self.primary.close(),
            self.secondary.close(),
            self.fear_greed.close(),
            self.tvl.close(),
            self.stablecoins.close(),
            self.gas.close(),
        )


def build_providers(
    cfg: ProviderConfig,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ProviderSet:
    """Instantiate all adapters. *transport* is shared by every client (tests)."""
    common = {
        "timeout_s": cfg.timeout_s,
        "user_agent": cfg.user_agent,
        "transport": transport,
    }
    return ProviderSet(
        primary=CoinGeckoClient(cfg.coingecko_url, **common),
        secondary=DefiLlamaPriceClient(cfg.defillama_coins_url, **common),
        fear_greed=FearGreedClient(cfg.fear_greed_url, **common),
        tvl=DefiLlamaTvlClient(cfg.defillama_api_url, **common),
        stablecoins=DefiLlamaStablecoinClient(cfg.defillama_stablecoins_url, **common),
        gas=GasClient(cfg.etherscan_url, api_key=cfg.etherscan_api_key, **common),
    )
