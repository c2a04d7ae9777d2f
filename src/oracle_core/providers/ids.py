"""Static ticker -> provider identifier tables.

Adding an asset is a data change here; tickers missing from a table are
skipped by that provider.
"""

from __future__ import annotations

COINGECKO_IDS: dict[str, str] = {
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "SOL": "solana",
    "BNB": "binancecoin",
    "XRP": "ripple",
    "ADA": "cardano",
    "AVAX": "avalanche-2",
    "DOGE": "dogecoin",
    "DOT": "polkadot",
    "MATIC": "matic-network",
    "LINK": "chainlink",
    "UNI": "uniswap",
    "AAVE": "aave",
    "ARB": "arbitrum",
    "OP": "optimism",
    "BASE": "base",
    "USDT": "tether",
    "USDC": "usd-coin",
}

DEFILLAMA_IDS: dict[str, str] = {
    "BTC": "coingecko:bitcoin",
    "ETH": "coingecko:ethereum",
    "SOL": "coingecko:solana",
    "BNB": "coingecko:binancecoin",
    "XRP": "coingecko:ripple",
    "ADA": "coingecko:cardano",
    "AVAX": "coingecko:avalanche-2",
    "DOGE": "coingecko:dogecoin",
    "LINK": "coingecko:chainlink",
    "UNI": "coingecko:uniswap",
    "AAVE": "coingecko:aave",
    "ARB": "coingecko:arbitrum",
    "OP": "coingecko:optimism",
}


def map_tickers(assets: list[str], table: dict[str, str]) -> dict[str, str]:
    """Return ``{ticker: provider_id}`` for the mapped subset, in request order."""
    mapped: dict[str, str] = {}
    for asset in assets:
        ticker = asset.upper()
        provider_id = table.get(ticker)
        if provider_id is not None and ticker not in mapped:
            mapped[ticker] = provider_id
    return mapped
