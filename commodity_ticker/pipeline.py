"""Fetch, transform and write the commodity ticker."""

import asyncio
import logging
import sys
from pathlib import Path

import httpx

from commodity_ticker.config import Settings
from commodity_ticker.data import ExchangeRateFetcher, FredFetcher
from commodity_ticker.indicators import build_items
from commodity_ticker.models import Observation, OutputDocument
from commodity_ticker.ui import export_ticker, fallback_document


logger = logging.getLogger(__name__)


class FetchError(Exception):
    """One or more fetches failed; ``errors`` maps source to exception."""

    def __init__(self, errors: dict[str, BaseException]) -> None:
        self.errors = errors
        details = ", ".join(f"{name}: {err!r}" for name, err in errors.items())
        super().__init__(f"Failed to fetch {len(errors)} source(s): {details}")


async def fetch_all(
    settings: Settings, client: httpx.AsyncClient
) -> tuple[float, dict[str, list[Observation]]]:
    """
    Fetch the exchange rate and every series concurrently.

    All requests settle before the outcome is judged; any failure fails
    the whole stage.

    Returns:
        (rate, observations by commodity key)

    Raises:
        FetchError: If any fetch failed
    """
    fred = FredFetcher(settings, client)
    fx = ExchangeRateFetcher(settings, client)

    kinds = list(settings.series)
    results = await asyncio.gather(
        fx.fetch_rate(),
        *(fred.fetch_series(settings.series[kind]) for kind in kinds),
        return_exceptions=True,
    )

    names = ["exchange_rate", *kinds]
    errors = {
        name: result
        for name, result in zip(names, results)
        if isinstance(result, BaseException)
    }
    if errors:
        raise FetchError(errors)

    rate, *series = results
    return rate, dict(zip(kinds, series))


async def run(settings: Settings, client: httpx.AsyncClient | None = None) -> OutputDocument:
    """Fetch and transform; an empty result becomes the fallback document."""
    if client is None:
        async with httpx.AsyncClient() as own_client:
            return await run(settings, own_client)

    rate, series_by_kind = await fetch_all(settings, client)
    items = build_items(settings, series_by_kind, rate)
    if not items:
        logger.warning("No ticker items could be built, using fallback")
        return fallback_document("leer")
    return OutputDocument(items=tuple(items))


async def update_ticker(
    settings: Settings, client: httpx.AsyncClient | None = None
) -> Path:
    """
    Run the pipeline and write the ticker file.

    With ``on_failure="fallback"`` any failure writes the fallback document
    instead, so the file always exists. With ``on_failure="fail"`` the error
    propagates and nothing is written.
    """
    try:
        document = await run(settings, client)
    except Exception as e:
        if settings.fail_fast:
            raise
        logger.warning(f"Live update failed: {e}")
        path = export_ticker(fallback_document("Fehler"), settings.output_path)
        logger.info(f"Fallback written to {path}")
        return path

    return export_ticker(document, settings.output_path)


def main() -> None:
    """CLI entry point for updating the ticker."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    settings = Settings()
    try:
        # In fallback mode a missing key surfaces as a failed fetch
        settings.validate(require_api_key=settings.fail_fast)
        asyncio.run(update_ticker(settings))
    except ValueError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)
    except FetchError as e:
        print(f"API error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
