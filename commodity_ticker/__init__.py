"""Commodity price ticker for the ticker.json widget feed."""

__version__ = "0.1.0"
