"""End-to-end tests for the ticker update."""

import dataclasses
import json

import httpx
import pytest

from commodity_ticker import pipeline
from commodity_ticker.data import ExchangeRateFetcher
from commodity_ticker.indicators import ATTRIBUTION
from commodity_ticker.pipeline import FetchError, run, update_ticker
from commodity_ticker.ui import fallback_document
from commodity_ticker.ui.ticker_exporter import render


def read(path) -> dict:
    return json.loads(path.read_text(encoding="utf-8"))


@pytest.mark.asyncio
async def test_single_observation_per_commodity(settings, single_point_backend) -> None:
    async with single_point_backend.client() as client:
        path = await update_ticker(settings, client)

    items = read(path)["items"]
    assert len(items) == 6
    assert items[-1] == {"text": ATTRIBUTION}
    for item in items[:-1]:
        assert item["extra"] == "EUR/t • Juni 2025"
    assert items[1] == {"text": "🍚 Zucker", "value": 397, "extra": "EUR/t • Juni 2025"}
    assert items[0]["value"] == 7200


@pytest.mark.asyncio
async def test_fetches_all_sources_once(settings, single_point_backend) -> None:
    async with single_point_backend.client() as client:
        await run(settings, client)

    hosts = sorted(r.url.host for r in single_point_backend.requests)
    assert hosts.count("api.exchangerate.host") == 1
    assert hosts.count("api.stlouisfed.org") == 5


@pytest.mark.asyncio
async def test_commodity_without_data_is_omitted(settings, single_point_backend, observations) -> None:
    single_point_backend.series["PMAIZMTUSDM"] = observations(("2025-06-01", "."))
    async with single_point_backend.client() as client:
        doc = await run(settings, client)

    texts = [item.text for item in doc.items]
    assert "🌽 Mais" not in texts
    assert len(texts) == 5


@pytest.mark.asyncio
async def test_no_valid_data_uses_empty_fallback(settings, backend_factory, observations) -> None:
    backend = backend_factory(
        series={sid: observations(("2025-06-01", ".")) for sid in settings.series.values()}
    )
    async with backend.client() as client:
        doc = await run(settings, client)

    assert doc == fallback_document("leer")


@pytest.mark.asyncio
async def test_transport_failure_writes_fallback(settings, single_point_backend) -> None:
    def timeout(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("Timeout", request=request)

    single_point_backend.fail_with = timeout
    async with single_point_backend.client() as client:
        path = await update_ticker(settings, client)

    assert read(path) == fallback_document("Fehler").to_dict()
    # every source: first attempt + retries
    assert len(single_point_backend.requests) == 6 * (settings.retries + 1)


@pytest.mark.asyncio
async def test_missing_key_writes_fallback(settings, single_point_backend) -> None:
    no_key = dataclasses.replace(settings, fred_api_key="")
    async with single_point_backend.client() as client:
        path = await update_ticker(no_key, client)

    assert read(path) == fallback_document("Fehler").to_dict()


@pytest.mark.asyncio
async def test_fail_mode_raises_and_writes_nothing(settings, single_point_backend) -> None:
    strict = dataclasses.replace(settings, on_failure="fail")
    single_point_backend.fail_with = lambda request: httpx.Response(500)

    async with single_point_backend.client() as client:
        with pytest.raises(FetchError) as exc_info:
            await update_ticker(strict, client)

    assert set(exc_info.value.errors) == {"exchange_rate", *settings.series}
    assert not settings.output_path.exists()


@pytest.mark.asyncio
async def test_identical_inputs_give_identical_output(settings, single_point_backend) -> None:
    async with single_point_backend.client() as client:
        first = (await update_ticker(settings, client)).read_bytes()
        second = (await update_ticker(settings, client)).read_bytes()
        document = await run(settings, client)

    assert first == second
    assert first.decode("utf-8") == render(document)


def test_main_fallback_exits_zero(monkeypatch, output_path) -> None:
    async def fixed_rate(self) -> float:
        return 0.9

    monkeypatch.setattr(ExchangeRateFetcher, "fetch_rate", fixed_rate)
    monkeypatch.setenv("FRED_API_KEY", "")
    monkeypatch.setenv("TICKER_OUTPUT", str(output_path))
    monkeypatch.setenv("TICKER_ON_FAILURE", "fallback")

    pipeline.main()

    assert read(output_path) == fallback_document("Fehler").to_dict()


def test_main_fail_mode_exits_nonzero(monkeypatch, output_path) -> None:
    monkeypatch.setenv("FRED_API_KEY", "")
    monkeypatch.setenv("TICKER_OUTPUT", str(output_path))
    monkeypatch.setenv("TICKER_ON_FAILURE", "fail")

    with pytest.raises(SystemExit) as exc_info:
        pipeline.main()

    assert exc_info.value.code == 1
    assert not output_path.exists()
