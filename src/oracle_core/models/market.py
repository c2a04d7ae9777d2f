"""Price models: per-source quotes, reconciled prices, full snapshots."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from oracle_core.models.domain import FearGreed, GasPrices, StablecoinRanking, TvlRanking


class SourceQuote(BaseModel):
    """One provider's observation for one asset, valid for a single cycle."""

    source: str
    price: float = Field(gt=0, allow_inf_nan=False)
    change_24h: float | None = None
    market_cap: float | None = None
    # Provider-reported confidence (DeFiLlama); not used in reconciliation.
    confidence: float | None = None


class ReconciledPrice(BaseModel):
    """Merged price for one asset with its confidence and divergence.

    Serialized with the camelCase names clients already consume
    (``sourceNames``, ``divergenceBps``, ``change24h``, ``marketCap``).
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    price: float
    sources: int = Field(ge=0, le=2)
    source_names: list[str] = Field(default_factory=list, alias="sourceNames")
    confidence: int = Field(ge=0, le=100)
    divergence_bps: int = Field(default=0, ge=0, alias="divergenceBps")
    warning: str | None = None
    change_24h: float | None = Field(default=None, alias="change24h")
    market_cap: float | None = Field(default=None, alias="marketCap")
    prices: dict[str, float] | None = None


class Snapshot(BaseModel):
    """The full aggregated payload produced by one aggregation cycle.

    Frozen: the cache hands the same instance to every reader, so response
    builders must work on ``model_dump`` copies.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    timestamp: int
    iso: str
    oracle: str
    verification: str = "cross-sourced"
    prices: dict[str, ReconciledPrice] = Field(default_factory=dict)
    fear_greed: FearGreed | None = Field(default=None, alias="fearGreed")
    tvl: TvlRanking | None = None
    stablecoins: StablecoinRanking | None = None
    gas: GasPrices | None = None

    def to_wire(self) -> dict:
        """Return a detached, JSON-ready dict using wire field names."""
        return self.model_dump(mode="json", by_alias=True)
