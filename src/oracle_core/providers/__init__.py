"""Upstream data provider adapters."""

from oracle_core.providers.alternative import FearGreedClient
from oracle_core.providers.coingecko import CoinGeckoClient
from oracle_core.providers.defillama import (
    DefiLlamaPriceClient,
    DefiLlamaStablecoinClient,
    DefiLlamaTvlClient,
)
from oracle_core.providers.etherscan import GasClient
from oracle_core.providers.registry import ProviderSet, build_providers

__all__ = [
    "CoinGeckoClient",
    "DefiLlamaPriceClient",
    "DefiLlamaStablecoinClient",
    "DefiLlamaTvlClient",
    "FearGreedClient",
    "GasClient",
    "ProviderSet",
    "build_providers",
]
