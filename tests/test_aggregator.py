"""Tests for the aggregation cycle."""

from __future__ import annotations

import asyncio
from datetime import datetime

from oracle_core.engine.aggregator import ORACLE_NAME, build_snapshot
from oracle_core.models import FearGreed, GasPrices, SourceQuote
from oracle_core.providers import ProviderSet


class StubPrices:
    def __init__(self, quotes: dict[str, SourceQuote] | None = None, error: Exception | None = None):
        self.quotes = quotes or {}
        self.error = error
        self.requested: list[str] | None = None

    async def fetch_quotes(self, assets):
        self.requested = list(assets)
        if self.error:
            raise self.error
        return {k: v for k, v in self.quotes.items() if k in assets}


class StubDomain:
    def __init__(self, value=None, error: Exception | None = None):
        self.value = value
        self.error = error

    async def fetch(self):
        await asyncio.sleep(0)
        if self.error:
            raise self.error
        return self.value


def _q(source, price, **kw):
    return SourceQuote(source=source, price=price, **kw)


def _providers(primary=None, secondary=None, **domain) -> ProviderSet:
    return ProviderSet(
        primary=primary or StubPrices(),
        secondary=secondary or StubPrices(),
        fear_greed=domain.get("fear_greed", StubDomain()),
        tvl=domain.get("tvl", StubDomain()),
        stablecoins=domain.get("stablecoins", StubDomain()),
        gas=domain.get("gas", StubDomain()),
    )


PRIMARY = StubPrices({
    "BTC": _q("coingecko", 67000, change_24h=-2.3),
    "ETH": _q("coingecko", 2000),
    "ADA": _q("coingecko", 0.45),
})
SECONDARY = StubPrices({
    "BTC": _q("defillama", 67005),
    "ETH": _q("defillama", 2020),
    "OP": _q("defillama", 1.8),
})


class TestBuildSnapshot:
    def test_reconciles_every_priced_ticker(self):
        snap = asyncio.run(build_snapshot(_providers(PRIMARY, SECONDARY), ["BTC", "ETH", "ADA", "OP"]))
        assert snap.prices["BTC"].confidence == 99
        assert snap.prices["ETH"].confidence == 85
        assert snap.prices["ADA"].sources == 1
        assert snap.prices["OP"].source_names == ["defillama"]

    def test_untracked_tickers_are_omitted(self):
        snap = asyncio.run(build_snapshot(_providers(PRIMARY, SECONDARY), ["BTC", "DOGE"]))
        assert list(snap.prices) == ["BTC"]

    def test_price_order_follows_request_order(self):
        snap = asyncio.run(build_snapshot(_providers(PRIMARY, SECONDARY), ["OP", "ADA", "BTC", "ETH"]))
        assert list(snap.prices) == ["OP", "ADA", "BTC", "ETH"]

    def test_tickers_uppercased_before_fetch(self):
        primary = StubPrices(PRIMARY.quotes)
        snap = asyncio.run(build_snapshot(_providers(primary, SECONDARY), ["btc", "Eth", "BTC"]))
        assert primary.requested == ["BTC", "ETH"]
        assert list(snap.prices) == ["BTC", "ETH"]

    def test_domain_blocks_attached(self):
        fg = FearGreed(value=40, label="Fear", timestamp=1)
        gas = GasPrices(low=1, standard=2, fast=3)
        snap = asyncio.run(build_snapshot(
            _providers(PRIMARY, SECONDARY, fear_greed=StubDomain(fg), gas=StubDomain(gas)),
            ["BTC"],
        ))
        assert snap.fear_greed == fg
        assert snap.gas == gas
        assert snap.tvl is None
        assert snap.stablecoins is None

    def test_raising_adapter_does_not_abort_cycle(self):
        providers = _providers(
            StubPrices(error=RuntimeError("bug in adapter")),
            SECONDARY,
            fear_greed=StubDomain(error=ValueError("bad")),
            gas=StubDomain(GasPrices(low=1, standard=2, fast=3)),
        )
        snap = asyncio.run(build_snapshot(providers, ["BTC", "ETH"]))
        assert snap.prices["BTC"].sources == 1
        assert snap.prices["BTC"].confidence == 60
        assert snap.fear_greed is None
        assert snap.gas is not None

    def test_all_sources_down_yields_empty_prices(self):
        snap = asyncio.run(build_snapshot(_providers(), ["BTC", "ETH"]))
        assert snap.prices == {}

    def test_metadata(self):
        snap = asyncio.run(build_snapshot(_providers(PRIMARY, SECONDARY), ["BTC"]))
        assert snap.oracle == ORACLE_NAME
        assert snap.verification == "cross-sourced"
        assert snap.iso.endswith("Z")
        parsed = datetime.fromisoformat(snap.iso.replace("Z", "+00:00"))
        assert int(parsed.timestamp()) == snap.timestamp


class TestBuildSnapshotOverHttp:
    def test_real_adapters_against_fake_upstream(self, providers, upstream):
        snap = asyncio.run(build_snapshot(providers, ["BTC", "ETH", "SOL", "ADA", "UNKNOWN"]))
        assert list(snap.prices) == ["BTC", "ETH", "SOL", "ADA"]
        assert snap.prices["BTC"].price == 67002.5
        assert snap.prices["SOL"].warning == "HIGH DIVERGENCE: 488bps between sources"
        assert snap.prices["ADA"].confidence == 60
        assert snap.fear_greed.value == 72
        assert len(snap.tvl.chains) == 15
        assert len(snap.stablecoins.stablecoins) == 10
        assert snap.gas.fast == 20
        # one request per provider per cycle
        assert set(upstream.calls.values()) == {1}
        assert len(upstream.calls) == 6

    def test_one_provider_down(self, providers, upstream):
        upstream.failing.add("coins.llama.fi")
        snap = asyncio.run(build_snapshot(providers, ["BTC", "ETH"]))
        assert snap.prices["BTC"].sources == 1
        assert snap.prices["BTC"].source_names == ["coingecko"]
        assert snap.prices["BTC"].confidence == 60

    def test_overflowing_upstream_price_falls_back_to_other_source(self, providers, upstream):
        upstream.bodies["api.coingecko.com"] = b'{"bitcoin": {"usd": 1e400}, "ethereum": {"usd": 2000}}'
        snap = asyncio.run(build_snapshot(providers, ["BTC", "ETH"]))
        assert snap.prices["BTC"].source_names == ["defillama"]
        assert snap.prices["BTC"].price == 67005
        assert snap.prices["BTC"].confidence == 60
        assert snap.prices["ETH"].sources == 2
