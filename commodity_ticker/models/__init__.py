"""Data models."""

from .ticker_data import DisplayItem, Observation, OutputDocument

__all__ = ["DisplayItem", "Observation", "OutputDocument"]
