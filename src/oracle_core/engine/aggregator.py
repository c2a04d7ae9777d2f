"""Aggregation cycle: fan out to every provider, reconcile, build a Snapshot."""

from __future__ import annotations

import asyncio
import time
from datetime import datetime, timezone
from typing import Any

from oracle_core import __version__
from oracle_core.engine.reconcile import reconcile
from oracle_core.logging import get_logger
from oracle_core.models import ReconciledPrice, Snapshot
from oracle_core.providers import ProviderSet

log = get_logger(__name__)

ORACLE_NAME = f"crypto-oracle v{__version__}"

_ADAPTERS = ("primary", "secondary", "fear_greed", "tvl", "stablecoins", "gas")


def _settled(name: str, result: Any, empty: Any) -> Any:
    """Collapse an adapter that raised anyway into its "no data" value."""
    if isinstance(result, BaseException):
        log.error(
            "adapter_raised",
            adapter=name,
            error=f"{type(result).__name__}: {result}",
        )
        return empty
    return result


def _iso(ts: float) -> str:
    dt = datetime.fromtimestamp(ts, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


async def build_snapshot(providers: ProviderSet, assets: list[str]) -> Snapshot:
    """Run one aggregation cycle for *assets*.

    All adapters run concurrently and the cycle waits for every one to settle;
    a failing adapter contributes no data but never aborts the cycle.
    """
    tickers = list(dict.fromkeys(a.upper() for a in assets))
    started = time.monotonic()

    results = await asyncio.gather(
        providers.primary.fetch_quotes(tickers),
        providers.secondary.fetch_quotes(tickers),
        providers.fear_greed.fetch(),
        providers.tvl.fetch(),
        providers.stablecoins.fetch(),
        providers.gas.fetch(),
        return_exceptions=True,
    )
    primary, secondary, fear_greed, tvl, stablecoins, gas = (
        _settled(name, result, {} if name in ("primary", "secondary") else None)
        for name, result in zip(_ADAPTERS, results)
    )

    prices: dict[str, ReconciledPrice] = {}
    for ticker in tickers:
        verified = reconcile(primary, secondary, ticker)
        if verified is not None:
            prices[ticker] = verified

    now = time.time()
    snapshot = Snapshot(
        timestamp=int(now),
        iso=_iso(now),
        oracle=ORACLE_NAME,
        prices=prices,
        fear_greed=fear_greed,
        tvl=tvl,
        stablecoins=stablecoins,
        gas=gas,
    )
    log.info(
        "snapshot_built",
        assets=len(tickers),
        priced=len(prices),
        duration_ms=round((time.monotonic() - started) * 1000, 1),
        missing=[t for t in tickers if t not in prices],
    )
    return snapshot
