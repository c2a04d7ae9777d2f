"""Cross-source reconciliation: merged price, divergence, confidence, data hash."""

from __future__ import annotations

import hashlib
import json
import math
from collections.abc import Mapping

from oracle_core.models import ReconciledPrice, SourceQuote

# (max divergence in bps, confidence), checked in order
CONFIDENCE_TABLE: tuple[tuple[int, int], ...] = (
    (10, 99),
    (50, 95),
    (100, 85),
    (300, 70),
)
FALLBACK_CONFIDENCE = 40
SINGLE_SOURCE_CONFIDENCE = 60
WARNING_THRESHOLD_BPS = 300


def confidence_for_divergence(divergence_bps: int) -> int:
    """Map a two-source divergence to a confidence score."""
    for max_bps, confidence in CONFIDENCE_TABLE:
        if divergence_bps <= max_bps:
            return confidence
    return FALLBACK_CONFIDENCE


def divergence_bps(price_a: float, price_b: float) -> int:
    """Relative difference of two prices against their mean, in basis points.

    Rounds half up.
    """
    mean = (price_a + price_b) / 2
    return math.floor(abs(price_a - price_b) / mean * 10000 + 0.5)


def _single_source(quote: SourceQuote) -> ReconciledPrice:
    return ReconciledPrice(
        price=quote.price,
        sources=1,
        source_names=[quote.source],
        confidence=SINGLE_SOURCE_CONFIDENCE,
        divergence_bps=0,
        change_24h=quote.change_24h,
        market_cap=quote.market_cap,
    )


def reconcile(
    quotes_a: Mapping[str, SourceQuote],
    quotes_b: Mapping[str, SourceQuote],
    ticker: str,
) -> ReconciledPrice | None:
    """Merge the two price sources' observations for *ticker*.

    Returns None when neither source priced the ticker. Sources are recorded
    in argument order (``quotes_a`` first).
    """
    ticker = ticker.upper()
    a = quotes_a.get(ticker)
    b = quotes_b.get(ticker)

    if a is None and b is None:
        return None
    if b is None:
        return _single_source(a)
    if a is None:
        return _single_source(b)

    mean = (a.price + b.price) / 2
    bps = divergence_bps(a.price, b.price)
    warning = None
    if bps > WARNING_THRESHOLD_BPS:
        warning = f"HIGH DIVERGENCE: {bps}bps between sources"

    return ReconciledPrice(
        price=mean,
        prices={a.source: a.price, b.source: b.price},
        sources=2,
        source_names=[a.source, b.source],
        confidence=confidence_for_divergence(bps),
        divergence_bps=bps,
        warning=warning,
        change_24h=a.change_24h if a.change_24h is not None else b.change_24h,
        market_cap=a.market_cap if a.market_cap is not None else b.market_cap,
    )


def _canonical_number(value: float) -> int | float:
    # 67000.0 and 67000 must hash the same
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def canonical_payload(ticker: str, price: float, sources: list[str], timestamp: int) -> str:
    """Compact JSON of the hashed fields, in fixed key order."""
    return json.dumps(
        {
            "asset": ticker,
            "price": _canonical_number(price),
            "sources": list(sources),
            "timestamp": timestamp,
        },
        separators=(",", ":"),
        ensure_ascii=False,
    )


def data_hash(ticker: str, price: float, sources: list[str], timestamp: int) -> str:
    """SHA-256 over the canonical payload, as a ``0x``-prefixed hex string."""
    payload = canonical_payload(ticker, price, sources, timestamp)
    return "0x" + hashlib.sha256(payload.encode("utf-8")).hexdigest()
