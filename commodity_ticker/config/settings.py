"""Configuration settings for the ticker update."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
import os

from dotenv import load_dotenv


load_dotenv()


# IMF primary commodity prices, served through FRED (monthly)
SERIES: dict[str, str] = {
    "cocoa": "PCOCOUSDM",  # USD/t
    "sugar": "PSUGAISAUSDM",  # cent/lb
    "wheat": "PWHEAMTUSDM",  # USD/t
    "corn": "PMAIZMTUSDM",  # USD/t
    "rice": "PRICENPQUSDM",  # USD/t
}

# Display order of the ticker
COMMODITY_LABELS: dict[str, str] = {
    "cocoa": "🍫 Kakao",
    "sugar": "🍚 Zucker",
    "wheat": "🌾 Weizen",
    "corn": "🌽 Mais",
    "rice": "🍚 Reis",
}

OBSERVATION_START = "2024-01-01"
AVERAGE_YEAR = "2024"
OUTPUT_FILE = "ticker.json"

# FRED marks gaps with "."
MISSING_VALUE = "."

# 1 cent/lb = 0.01 USD/lb, 1 t = 2204.62262 lb
CENT_PER_LB_TO_USD_PER_T = 22.04622

DEFAULT_USD_TO_EUR = 0.93

FAILURE_POLICIES = ("fallback", "fail")


@dataclass(frozen=True)
class Settings:
    """Application settings, built once per run."""

    fred_api_key: str = field(default_factory=lambda: os.getenv("FRED_API_KEY", ""))
    output_path: Path = field(
        default_factory=lambda: Path(os.getenv("TICKER_OUTPUT", OUTPUT_FILE))
    )
    on_failure: str = field(
        default_factory=lambda: os.getenv("TICKER_ON_FAILURE", "fallback").lower()
    )
    series: Mapping[str, str] = field(default_factory=lambda: dict(SERIES))
    labels: Mapping[str, str] = field(default_factory=lambda: dict(COMMODITY_LABELS))
    observation_start: str = OBSERVATION_START
    average_year: str = AVERAGE_YEAR
    base_currency: str = "USD"
    target_currency: str = "EUR"
    fallback_rate: float = DEFAULT_USD_TO_EUR
    retries: int = 2
    timeout: float = 10.0  # seconds per request
    retry_delay: float = 0.4  # seconds, multiplied by the attempt number

    def __post_init__(self) -> None:
        # Read-only copies of the mappings
        object.__setattr__(self, "series", MappingProxyType(dict(self.series)))
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    def validate(self, require_api_key: bool = True) -> None:
        """Validate required settings."""
        if self.on_failure not in FAILURE_POLICIES:
            raise ValueError(
                f"TICKER_ON_FAILURE must be one of {', '.join(FAILURE_POLICIES)}, "
                f"got {self.on_failure!r}"
            )
        if require_api_key and not self.fred_api_key:
            raise ValueError(
                "FRED_API_KEY not set. Get one at: "
                "https://fred.stlouisfed.org/docs/api/api_key.html"
            )

    @property
    def fail_fast(self) -> bool:
        """True when failures should abort the run instead of writing the fallback."""
        return self.on_failure == "fail"
