"""Currency rate fetcher (exchangerate.host)."""

import logging

import httpx

from commodity_ticker.config import Settings
from commodity_ticker.data.http import fetch_json


logger = logging.getLogger(__name__)


class ExchangeRateFetcher:
    """Fetches the base to target currency rate."""

    BASE_URL = "https://api.exchangerate.host"

    def __init__(
        self, settings: Settings | None = None, client: httpx.AsyncClient | None = None
    ) -> None:
        self.settings = settings or Settings()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "ExchangeRateFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def fetch_rate(self) -> float:
        """
        Fetch units of target currency per unit of base currency.

        Falls back to ``settings.fallback_rate`` when the response has no
        usable rate. Transport errors propagate.
        """
        base = self.settings.base_currency
        symbol = self.settings.target_currency
        logger.info(f"Fetching {base}/{symbol} rate...")

        data = await fetch_json(
            self.client,
            f"{self.BASE_URL}/latest",
            params={"base": base, "symbols": symbol},
            retries=self.settings.retries,
            timeout=self.settings.timeout,
            delay=self.settings.retry_delay,
        )

        rates = data.get("rates") if isinstance(data, dict) else None
        rate = rates.get(symbol) if isinstance(rates, dict) else None
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            logger.warning(
                f"  No {symbol} rate in response, using {self.settings.fallback_rate}"
            )
            return self.settings.fallback_rate

        logger.info(f"  {base}/{symbol}: {rate}")
        return float(rate)
