"""Ticker document output."""

from commodity_ticker.ui.ticker_exporter import export_ticker, fallback_document

__all__ = ["export_ticker", "fallback_document"]
