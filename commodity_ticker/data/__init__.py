"""Data fetching."""

from .exchange_rate_fetcher import ExchangeRateFetcher
from .fred_fetcher import FredFetcher
from .http import fetch_json, linear_backoff, retry_async

__all__ = [
    "ExchangeRateFetcher",
    "FredFetcher",
    "fetch_json",
    "linear_backoff",
    "retry_async",
]
