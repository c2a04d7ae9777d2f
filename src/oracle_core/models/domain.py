"""Market-wide data blocks: sentiment, TVL, stablecoins, gas."""

from __future__ import annotations

from pydantic import BaseModel, Field


class FearGreed(BaseModel):
    """Crypto Fear & Greed index reading."""

    value: int = Field(ge=0, le=100)
    label: str
    timestamp: int
    source: str = "alternative.me"


class ChainTvl(BaseModel):
    chain: str
    tvl: float


class TvlRanking(BaseModel):
    """Chains ranked by total value locked, largest first."""

    chains: list[ChainTvl]
    source: str = "defillama"


class Stablecoin(BaseModel):
    name: str
    symbol: str
    circulating: float
    price: float | None = None


class StablecoinRanking(BaseModel):
    """Stablecoins ranked by circulating USD supply, largest first."""

    stablecoins: list[Stablecoin]
    source: str = "defillama"


class GasPrices(BaseModel):
    """Ethereum gas price tiers in gwei."""

    low: float
    standard: float
    fast: float
    source: str = "etherscan"
