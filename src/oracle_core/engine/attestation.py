"""Attestation payloads for the external on-chain ledger.

The service never submits these; an operator feeds them to the attestation
contract's ``attest`` call out of band.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel

from oracle_core.engine.reconcile import data_hash
from oracle_core.models import ReconciledPrice

PRICE_DECIMALS = 8


class AttestationPayload(BaseModel):
    """Arguments for ``attest(asset, price, sources, confidence, divergenceBps, dataHash)``."""

    asset: str
    price: int
    sources: int
    confidence: int
    divergence_bps: int
    data_hash: str


def scale_price(price: float, decimals: int = PRICE_DECIMALS) -> int:
    """Fixed-point integer price, e.g. 67438.0 -> 6743800000000 at 8 decimals."""
    scaled = Decimal(str(price)) * (Decimal(10) ** decimals)
    return int(scaled.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def build_attestation(asset: str, price: ReconciledPrice, timestamp: int) -> AttestationPayload:
    asset = asset.upper()
    return AttestationPayload(
        asset=asset,
        price=scale_price(price.price),
        sources=price.sources,
        confidence=price.confidence,
        divergence_bps=price.divergence_bps,
        data_hash=data_hash(asset, price.price, price.source_names, timestamp),
    )
