"""Calculate ticker display values from raw FRED observations."""

import math
from typing import NamedTuple

import numpy as np
import pandas as pd

from commodity_ticker.config import AVERAGE_YEAR, CENT_PER_LB_TO_USD_PER_T, Settings
from commodity_ticker.models import DisplayItem, Observation


UNIT = "EUR/t"
SEPARATOR = " • "
ATTRIBUTION = "Quelle: IMF über FRED (täglich aktualisiert)"

# de-DE short month names
MONTHS_DE = (
    "Jan.", "Feb.", "März", "Apr.", "Mai", "Juni",
    "Juli", "Aug.", "Sept.", "Okt.", "Nov.", "Dez.",
)


class ValuePoint(NamedTuple):
    """A dated numeric observation."""

    date: str
    value: float


def to_frame(series: list[Observation]) -> pd.DataFrame:
    """
    Convert observations to a frame of valid values.

    Missing sentinels, non-numeric or non-finite values and rows without a
    valid ISO date are dropped.
    Row order follows the input (date ascending).
    """
    if not series:
        return pd.DataFrame(columns=["date", "value"])

    df = pd.DataFrame([{"date": o.date, "value": o.value} for o in series])
    df["value"] = pd.to_numeric(df["value"], errors="coerce").replace([np.inf, -np.inf], np.nan)
    valid_date = pd.to_datetime(df["date"], format="%Y-%m-%d", errors="coerce").notna()
    return df[valid_date].dropna(subset=["value"]).reset_index(drop=True)


def _point(df: pd.DataFrame, pos: int) -> ValuePoint:
    row = df.iloc[pos]
    return ValuePoint(date=str(row["date"]), value=float(row["value"]))


def latest_valid(series: list[Observation]) -> ValuePoint | None:
    """Most recent non-missing observation."""
    df = to_frame(series)
    if df.empty:
        return None
    return _point(df, -1)


def previous_valid(series: list[Observation]) -> ValuePoint | None:
    """Second most recent non-missing observation."""
    df = to_frame(series)
    if len(df) < 2:
        return None
    return _point(df, -2)


def yearly_average(series: list[Observation], year: str = AVERAGE_YEAR) -> float | None:
    """Mean of the valid observations dated within ``year``."""
    df = to_frame(series)
    in_year = df[df["date"].astype(str).str.startswith(f"{year}-")]
    if in_year.empty:
        return None
    return float(in_year["value"].mean())


def pct(current: float, base: float | None) -> float | None:
    """Percentage change of ``current`` against ``base``."""
    if base is None:
        return None
    if base == 0:
        return math.copysign(math.inf, current) if current else math.nan
    return (current - base) / base * 100


def to_target_currency(kind: str, value: float, rate: float) -> float:
    """Convert a raw USD/t (sugar: cent/lb) value with the exchange rate."""
    if kind == "sugar":
        return value * CENT_PER_LB_TO_USD_PER_T * rate
    return value * rate


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def month_label(iso_date: str) -> str:
    """Render ``2025-03-01`` as ``März 2025``."""
    year, month = iso_date[:4], int(iso_date[5:7])
    return f"{MONTHS_DE[month - 1]} {year}"


def format_delta(delta: float, suffix: str) -> str:
    """Render ``3.256`` as ``+3,26% <suffix>``."""
    sign = "+" if delta >= 0 else ""
    return f"{sign}{delta:.2f}".replace(".", ",") + f"% {suffix}"


def build_item(
    label: str,
    kind: str,
    series: list[Observation],
    rate: float,
    year: str = AVERAGE_YEAR,
) -> DisplayItem | None:
    """
    Build the ticker entry for one commodity.

    Args:
        label: Display text, e.g. "🌾 Weizen"
        kind: Commodity key; "sugar" is quoted in cent/lb
        series: Raw observations, date ascending
        rate: Exchange rate applied to the displayed value
        year: Year whose average the current value is compared against

    Returns:
        The entry, or None if the series has no valid value
    """
    current = latest_valid(series)
    if current is None:
        return None

    previous = previous_valid(series)
    average = yearly_average(series, year)

    # Deltas compare raw values; the ratio does not depend on the currency
    vs_previous = pct(current.value, previous.value if previous else None)
    vs_average = pct(current.value, average)

    parts = [month_label(current.date)]
    if vs_previous is not None and math.isfinite(vs_previous):
        parts.append(format_delta(vs_previous, "vs VM"))
    if vs_average is not None and math.isfinite(vs_average):
        parts.append(format_delta(vs_average, f"vs {year}-Ø"))

    return DisplayItem(
        text=label,
        value=round_half_up(to_target_currency(kind, current.value, rate)),
        extra=SEPARATOR.join([UNIT, *parts]),
    )


def build_items(
    settings: Settings,
    series_by_kind: dict[str, list[Observation]],
    rate: float,
) -> list[DisplayItem]:
    """
    Build all ticker entries plus the trailing attribution line.

    Returns an empty list when no commodity produced an entry.
    """
    items = []
    for kind, label in settings.labels.items():
        item = build_item(label, kind, series_by_kind.get(kind, []), rate, settings.average_year)
        if item is not None:
            items.append(item)

    if not items:
        return []
    return [*items, DisplayItem(text=ATTRIBUTION)]
