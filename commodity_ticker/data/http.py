"""HTTP helpers: JSON GET with timeout and linear-backoff retry."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import httpx


logger = logging.getLogger(__name__)

T = TypeVar("T")


def linear_backoff(base: float) -> Callable[[int], float]:
    """Delay of ``base * attempt`` seconds, attempts counted from 1."""
    return lambda attempt: base * attempt


async def retry_async(
    operation: Callable[[], Awaitable[T]],
    retries: int,
    delay: Callable[[int], float],
) -> T:
    """
    Run an async operation, retrying on HTTP errors.

    Args:
        operation: Zero-argument callable returning a fresh awaitable per attempt
        retries: Additional attempts after the first one
        delay: Maps the 1-based attempt number to a sleep in seconds

    Returns:
        The operation's result

    Raises:
        httpx.HTTPError: The last error once the retry budget is spent
    """
    attempt = 1
    while True:
        try:
            return await operation()
        except httpx.HTTPError as e:
            if attempt > retries:
                raise
            wait = delay(attempt)
            logger.warning(f"  Attempt {attempt} failed ({e!r}), retrying in {wait:.1f}s")
            await asyncio.sleep(wait)
            attempt += 1


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict | None = None,
    retries: int = 2,
    timeout: float = 10.0,
    delay: float = 0.4,
) -> Any:
    """
    GET a URL and parse the JSON body.

    The timeout applies to each request on its own; a timed-out request is
    cancelled and counted as a failed attempt.
    """

    async def attempt() -> Any:
        response = await client.get(
            url,
            params=params,
            timeout=timeout,
            headers={"Cache-Control": "no-store"},
        )
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as e:
            # A garbled body is retried like any other failed request
            raise httpx.DecodingError(f"Invalid JSON from {url}: {e}", request=response.request) from e

    return await retry_async(attempt, retries, linear_backoff(delay))
