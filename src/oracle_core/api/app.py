"""FastAPI application: read-only oracle HTTP surface."""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any

import structlog
from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from oracle_core import __version__
from oracle_core.config.loader import load_config
from oracle_core.config.schema import AppConfig
from oracle_core.engine import RateLimiter, SnapshotCache, build_snapshot, data_hash
from oracle_core.models import Snapshot
from oracle_core.providers import ProviderSet, build_providers

logger = structlog.get_logger()

router = APIRouter()

UNAVAILABLE = {"error": "Unavailable"}

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Content-Security-Policy": "default-src 'none'",
}


def _window_label(seconds: float) -> str:
    if seconds % 3600 == 0:
        hours = int(seconds // 3600)
        return "1 hour" if hours == 1 else f"{hours} hours"
    return f"{seconds:g} seconds"


def _client_id(request: Request) -> str:
    return request.client.host if request.client else "unknown"


# ── Dependencies ─────────────────────────────────────────────


def get_cache(request: Request) -> SnapshotCache:
    return request.app.state.cache


def get_providers(request: Request) -> ProviderSet:
    return request.app.state.providers


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def enforce_rate_limit(request: Request, response: Response) -> None:
    """Consume one unit of the caller's quota or reject with 429.

    Admitted responses carry ``X-RateLimit-Remaining``.
    """
    limiter: RateLimiter = request.app.state.limiter
    client = _client_id(request)
    if not limiter.admit(client):
        logger.warning("rate_limited", client=client, path=request.url.path)
        raise HTTPException(
            status_code=429,
            detail={
                "error": "Rate limited",
                "limit": limiter.quota,
                "window": _window_label(limiter.window_seconds),
            },
        )
    response.headers["X-RateLimit-Remaining"] = str(limiter.remaining(client))


# ── Response builders ────────────────────────────────────────


def snapshot_response(snapshot: Snapshot) -> dict[str, Any]:
    """Wire form of *snapshot* with a data hash on every price.

    Works on a detached copy; the cached instance is never modified.
    """
    body = snapshot.to_wire()
    for asset, info in body["prices"].items():
        price = snapshot.prices[asset]
        info["dataHash"] = data_hash(asset, price.price, price.source_names, snapshot.timestamp)
    return body


def price_response(snapshot: Snapshot, asset: str) -> dict[str, Any] | None:
    price = snapshot.prices.get(asset)
    if price is None:
        return None
    body = price.model_dump(mode="json", by_alias=True)
    body["dataHash"] = data_hash(asset, price.price, price.source_names, snapshot.timestamp)
    body["asset"] = asset
    body["timestamp"] = snapshot.timestamp
    body["iso"] = snapshot.iso
    return body


# ── Routes ───────────────────────────────────────────────────


@router.get("/")
async def index(config: AppConfig = Depends(get_config)):
    """Service description and endpoint catalogue."""
    return {
        "name": "crypto-oracle",
        "version": __version__,
        "description": "Cross-sourced crypto data oracle",
        "verification": (
            "Prices cross-checked between CoinGecko and DeFiLlama. Every data point "
            "includes a confidence score and divergence metrics."
        ),
        "endpoints": {
            "/snapshot": "Full market snapshot (prices, TVL, stablecoins, gas, fear&greed)",
            "/price/{asset}": "Single asset price with cross-verification",
            "/prices": "All tracked asset prices",
            "/fear-greed": "Crypto Fear & Greed Index",
            "/tvl": "Chain TVL rankings",
            "/stablecoins": "Stablecoin market caps",
            "/gas": "Ethereum gas prices",
            "/verify/{hash}": "Verify a data point hash",
            "/health": "Service health",
        },
        "rateLimit": (
            f"{config.rate_limit.quota} calls per "
            f"{_window_label(config.rate_limit.window_s)}"
        ),
        "attestation": f"{config.attestation.network} (on-chain verification)",
    }


@router.get("/snapshot", dependencies=[Depends(enforce_rate_limit)])
async def get_snapshot(cache: SnapshotCache = Depends(get_cache)):
    """Full snapshot with a data hash attached to every price."""
    snapshot = await cache.get()
    return snapshot_response(snapshot)


@router.get("/price/{asset}", dependencies=[Depends(enforce_rate_limit)])
async def get_price(asset: str, cache: SnapshotCache = Depends(get_cache)):
    """Single reconciled price, with hash and snapshot timestamp."""
    asset = asset.upper()
    snapshot = await cache.get()
    body = price_response(snapshot, asset)
    if body is None:
        raise HTTPException(status_code=404, detail=f"Asset {asset} not tracked")
    return body


@router.get("/prices", dependencies=[Depends(enforce_rate_limit)])
async def get_prices(cache: SnapshotCache = Depends(get_cache)):
    """All reconciled prices, without hashes."""
    snapshot = await cache.get()
    wire = snapshot.to_wire()
    return {"timestamp": wire["timestamp"], "iso": wire["iso"], "prices": wire["prices"]}


@router.get("/fear-greed", dependencies=[Depends(enforce_rate_limit)])
async def get_fear_greed(providers: ProviderSet = Depends(get_providers)):
    result = await providers.fear_greed.fetch()
    return result.model_dump(mode="json") if result else UNAVAILABLE


@router.get("/tvl", dependencies=[Depends(enforce_rate_limit)])
async def get_tvl(providers: ProviderSet = Depends(get_providers)):
    result = await providers.tvl.fetch()
    return result.model_dump(mode="json") if result else UNAVAILABLE


@router.get("/stablecoins", dependencies=[Depends(enforce_rate_limit)])
async def get_stablecoins(providers: ProviderSet = Depends(get_providers)):
    result = await providers.stablecoins.fetch()
    return result.model_dump(mode="json") if result else UNAVAILABLE


@router.get("/gas", dependencies=[Depends(enforce_rate_limit)])
async def get_gas(providers: ProviderSet = Depends(get_providers)):
    result = await providers.gas.fetch()
    return result.model_dump(mode="json") if result else UNAVAILABLE


@router.get("/verify/{digest}")
async def verify(digest: str, config: AppConfig = Depends(get_config)):
    """Point the caller at the attestation contract; no lookup happens here."""
    return {
        "hash": digest,
        "note": f"Verify this hash against the attestation contract on {config.attestation.network}",
        "contract": config.attestation.contract_address,
        "howToVerify": "Call attestations(id).dataHash and compare with this hash",
    }


@router.get("/health")
async def health(request: Request, cache: SnapshotCache = Depends(get_cache)):
    """Liveness, uptime, and cache age."""
    return {
        "status": "ok",
        "uptime": round(time.monotonic() - request.app.state.started_at, 3),
        "cacheAge": cache.age_seconds(),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


# ── Application factory ──────────────────────────────────────


def create_app(
    config: AppConfig | None = None,
    providers: ProviderSet | None = None,
) -> FastAPI:
    """Build the app with its own providers, snapshot cache and rate limiter."""
    config = config or load_config()
    providers = providers or build_providers(config.providers)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(
            "oracle_started",
            assets=config.assets,
            rate_limit=config.rate_limit.quota,
            cache_ttl_s=config.cache.ttl_s,
        )
        yield
        await providers.close()
        logger.info("oracle_stopped")

    app = FastAPI(
        title="Crypto Oracle API",
        description="Cross-sourced crypto prices with confidence scores and attestation hashes",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        body = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
        return JSONResponse(body, status_code=exc.status_code, headers=exc.headers)

    @app.exception_handler(Exception)
    async def internal_error(request: Request, exc: Exception):
        logger.exception("request_failed", path=request.url.path)
        return JSONResponse(
            {"error": "Internal server error"},
            status_code=500,
            headers=SECURITY_HEADERS,
        )

    assets = list(config.assets)

    async def refresh() -> Snapshot:
        return await build_snapshot(providers, assets)

    app.state.config = config
    app.state.providers = providers
    app.state.cache = SnapshotCache(refresh, ttl_seconds=config.cache.ttl_s)
    app.state.limiter = RateLimiter(
        quota=config.rate_limit.quota,
        window_seconds=config.rate_limit.window_s,
    )
    app.state.started_at = time.monotonic()

    app.include_router(router)
    return app
