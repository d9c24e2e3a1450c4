"""Data models for observations and the ticker document."""

from dataclasses import dataclass

from commodity_ticker.config.settings import MISSING_VALUE


@dataclass(frozen=True)
class Observation:
    """Single observation from a FRED series."""

    date: str  # ISO date
    value: str  # numeric literal or MISSING_VALUE

    @classmethod
    def from_api(cls, raw: dict) -> "Observation":
        value = raw.get("value")
        return cls(
            date=str(raw.get("date", "")),
            value=MISSING_VALUE if value is None else str(value),
        )

    @property
    def is_missing(self) -> bool:
        return self.value == MISSING_VALUE


@dataclass(frozen=True)
class DisplayItem:
    """One ticker entry. The attribution entry carries only ``text``."""

    text: str
    value: int | None = None
    extra: str | None = None

    def to_dict(self) -> dict:
        if self.value is None and self.extra is None:
            return {"text": self.text}
        return {"text": self.text, "value": self.value, "extra": self.extra}


@dataclass(frozen=True)
class OutputDocument:
    """The ticker.json payload."""

    items: tuple[DisplayItem, ...]

    def to_dict(self) -> dict:
        return {"items": [item.to_dict() for item in self.items]}
