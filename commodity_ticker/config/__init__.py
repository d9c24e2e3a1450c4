"""Configuration."""

from .settings import (
    AVERAGE_YEAR,
    CENT_PER_LB_TO_USD_PER_T,
    COMMODITY_LABELS,
    DEFAULT_USD_TO_EUR,
    MISSING_VALUE,
    OBSERVATION_START,
    OUTPUT_FILE,
    SERIES,
    Settings,
)

__all__ = [
    "AVERAGE_YEAR",
    "CENT_PER_LB_TO_USD_PER_T",
    "COMMODITY_LABELS",
    "DEFAULT_USD_TO_EUR",
    "MISSING_VALUE",
    "OBSERVATION_START",
    "OUTPUT_FILE",
    "SERIES",
    "Settings",
]
