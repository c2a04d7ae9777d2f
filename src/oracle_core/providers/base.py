"""Shared HTTP plumbing for upstream data providers."""

from __future__ import annotations

import asyncio
from typing import Any

import httpx

from oracle_core.logging import get_logger

log = get_logger(__name__)

# Failures an adapter absorbs: transport/status errors, timeouts, and
# payloads that don't have the shape we expect.
FETCH_ERRORS: tuple[type[BaseException], ...] = (
    httpx.HTTPError,
    TimeoutError,
    ValueError,
    KeyError,
    TypeError,
    IndexError,
    AttributeError,
)


class ProviderClient:
    """Async JSON-over-HTTP client for one upstream provider.

    Subclasses implement the normalizing fetch; they must catch
    ``FETCH_ERRORS`` and degrade to "no data" instead of raising.
    """

    name = "provider"

    def __init__(
        self,
        base_url: str,
        timeout_s: float = 10.0,
        user_agent: str = "crypto-oracle/1.0",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.user_agent = user_agent
        self._transport = transport
        self._http: httpx.AsyncClient | None = None

    async def _get_http(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                timeout=self.timeout_s,
                headers={"User-Agent": self.user_agent},
                transport=self._transport,
            )
        return self._http

    async def close(self) -> None:
        if self._http and not self._http.is_closed:
            await self._http.aclose()

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``base_url + path`` and decode JSON, bounded by ``timeout_s`` overall."""
        http = await self._get_http()
        async with asyncio.timeout(self.timeout_s):
            resp = await http.get(f"{self.base_url}{path}", params=params)
        resp.raise_for_status()
        return resp.json()

    def _degraded(self, exc: BaseException, **context: Any) -> None:
        log.warning(
            "provider_fetch_failed",
            provider=self.name,
            error=f"{type(exc).__name__}: {exc}",
            **context,
        )
