"""Configuration schema: Pydantic models for config.yaml."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_ASSETS = ["BTC", "ETH", "SOL", "BNB", "XRP", "LINK", "AAVE", "ARB", "OP", "UNI"]


class ServerConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3042


class RateLimitConfig(BaseModel):
    quota: int = Field(default=30, ge=1)
    window_s: float = 3600.0


class CacheConfig(BaseModel):
    ttl_s: float = 60.0


class ProviderConfig(BaseModel):
    timeout_s: float = 10.0
    user_agent: str = "crypto-oracle/1.0"
    coingecko_url: str = "https://api.coingecko.com/api/v3"
    defillama_coins_url: str = "https://coins.llama.fi"
    defillama_api_url: str = "https://api.llama.fi"
    defillama_stablecoins_url: str = "https://stablecoins.llama.fi"
    fear_greed_url: str = "https://api.alternative.me"
    etherscan_url: str = "https://api.etherscan.io"
    etherscan_api_key: str | None = None


class AttestationConfig(BaseModel):
    contract_address: str = "0xF30C7624f5d759e3695738374Ff2D1618E92F12C"
    network: str = "Base Sepolia"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "json"


class AppConfig(BaseModel):
    assets: list[str] = Field(default_factory=lambda: list(DEFAULT_ASSETS))
    server: ServerConfig = Field(default_factory=ServerConfig)
    rate_limit: RateLimitConfig = Field(default_factory=RateLimitConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    providers: ProviderConfig = Field(default_factory=ProviderConfig)
    attestation: AttestationConfig = Field(default_factory=AttestationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
