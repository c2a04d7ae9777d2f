"""Etherscan gas oracle adapter."""

from __future__ import annotations

from typing import Any

from oracle_core.logging import get_logger
from oracle_core.models import GasPrices
from oracle_core.providers.base import FETCH_ERRORS, ProviderClient

log = get_logger(__name__)


class GasClient(ProviderClient):
    """Ethereum gas tiers (safe / propose / fast) from the Etherscan gas oracle."""

    name = "etherscan"

    def __init__(
        self,
        base_url: str = "https://api.etherscan.io",
        api_key: str | None = None,
        **kwargs,
    ):
        super().__init__(base_url, **kwargs)
        self.api_key = api_key

    async def fetch(self) -> GasPrices | None:
        params: dict[str, Any] = {"module": "gastracker", "action": "gasoracle"}
        if self.api_key:
            params["apikey"] = self.api_key

        try:
            data = await self._get_json("/api", params=params)
            return self.parse(data)
        except FETCH_ERRORS as exc:
            self._degraded(exc)
            return None

    @classmethod
    def parse(cls, data: dict) -> GasPrices | None:
        """Return gas tiers, or None when Etherscan reports a non-success status."""
        if str(data.get("status")) != "1":
            log.warning(
                "provider_unavailable",
                provider=cls.name,
                status=data.get("status"),
                message=data.get("message"),
            )
            return None
        result = data["result"]
        return GasPrices(
            low=float(result["SafeGasPrice"]),
            standard=float(result["ProposeGasPrice"]),
            fast=float(result["FastGasPrice"]),
            source=cls.name,
        )
