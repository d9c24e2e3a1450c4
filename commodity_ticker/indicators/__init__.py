"""Ticker value calculations."""

from commodity_ticker.indicators.calculator import (
    ATTRIBUTION,
    build_item,
    build_items,
    latest_valid,
    pct,
    previous_valid,
    yearly_average,
)

__all__ = [
    "ATTRIBUTION",
    "build_item",
    "build_items",
    "latest_valid",
    "pct",
    "previous_valid",
    "yearly_average",
]
