"""FRED API observation fetcher."""

import logging

import httpx

from commodity_ticker.config import Settings
from commodity_ticker.data.http import fetch_json
from commodity_ticker.models import Observation


logger = logging.getLogger(__name__)


class FredFetcher:
    """Fetches commodity observations from the FRED API."""

    BASE_URL = "https://api.stlouisfed.org/fred"

    def __init__(
        self, settings: Settings | None = None, client: httpx.AsyncClient | None = None
    ) -> None:
        self.settings = settings or Settings()
        self._client = client
        self._owns_client = client is None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-initialize HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self._client

    async def close(self) -> None:
        """Close HTTP client if this fetcher created it."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FredFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.close()

    async def fetch_series(self, series_id: str) -> list[Observation]:
        """
        Fetch observations for a series from the configured start date on.

        Args:
            series_id: FRED series ID

        Returns:
            Observations in date order, as returned by FRED

        Raises:
            ValueError: If no API key is configured
            httpx.HTTPError: If the request still fails after all retries
        """
        if not self.settings.fred_api_key:
            raise ValueError("FRED_API_KEY not set")

        logger.info(f"Fetching {series_id}...")
        data = await fetch_json(
            self.client,
            f"{self.BASE_URL}/series/observations",
            params={
                "series_id": series_id,
                "api_key": self.settings.fred_api_key,
                "file_type": "json",
                "observation_start": self.settings.observation_start,
            },
            retries=self.settings.retries,
            timeout=self.settings.timeout,
            delay=self.settings.retry_delay,
        )

        raw = data.get("observations") if isinstance(data, dict) else None
        observations = [Observation.from_api(o) for o in raw or []]
        logger.info(f"  {series_id}: {len(observations)} observations")
        return observations
