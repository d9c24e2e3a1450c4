"""Pytest configuration and fixtures for ticker tests.

Provides settings pointed at a temp directory and a fake FRED /
exchangerate.host backend built on httpx.MockTransport.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import httpx
import pytest

from commodity_ticker.config import Settings


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    """Ticker output file inside the test's temp dir."""
    return tmp_path / "ticker.json"


@pytest.fixture
def settings(output_path: Path) -> Settings:
    """Settings with a dummy key and no retry delay."""
    return Settings(
        fred_api_key="test-key",
        output_path=output_path,
        on_failure="fallback",
        retry_delay=0.0,
    )


def make_observations(*points: tuple[str, str]) -> dict:
    """FRED observations payload from (date, value) pairs."""
    return {"observations": [{"date": d, "value": v} for d, v in points]}


class FakeBackend:
    """Serves canned FRED and exchange-rate responses, counting requests."""

    def __init__(
        self,
        series: dict[str, dict] | None = None,
        rates: dict | None = None,
    ) -> None:
        self.series = series or {}
        self.rates = rates if rates is not None else {"rates": {"EUR": 0.9}}
        self.requests: list[httpx.Request] = []
        self.fail_with: Callable[[httpx.Request], httpx.Response] | None = None

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            return self.fail_with(request)

        if request.url.host == "api.exchangerate.host":
            return httpx.Response(200, json=self.rates)

        series_id = request.url.params.get("series_id")
        if series_id not in self.series:
            return httpx.Response(400, json={"error_message": "Bad Request"})
        return httpx.Response(200, json=self.series[series_id])

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def single_point_backend() -> FakeBackend:
    """Every commodity has exactly one valid observation, nothing in 2024."""
    return FakeBackend(
        series={
            "PCOCOUSDM": make_observations(("2025-06-01", "8000")),
            "PSUGAISAUSDM": make_observations(("2025-06-01", "20")),
            "PWHEAMTUSDM": make_observations(("2025-06-01", "250")),
            "PMAIZMTUSDM": make_observations(("2025-06-01", "200")),
            "PRICENPQUSDM": make_observations(("2025-06-01", "500")),
        }
    )


@pytest.fixture
def observations() -> Callable[..., dict]:
    """Factory for FRED observations payloads."""
    return make_observations


@pytest.fixture
def backend_factory() -> type[FakeBackend]:
    """Factory for fake API backends."""
    return FakeBackend
