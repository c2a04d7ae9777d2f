"""Pydantic domain models."""

from oracle_core.models.domain import (
    ChainTvl,
    FearGreed,
    GasPrices,
    Stablecoin,
    StablecoinRanking,
    TvlRanking,
)
from oracle_core.models.market import ReconciledPrice, Snapshot, SourceQuote

__all__ = [
    "ChainTvl",
    "FearGreed",
    "GasPrices",
    "ReconciledPrice",
    "Snapshot",
    "SourceQuote",
    "Stablecoin",
    "StablecoinRanking",
    "TvlRanking",
]
