"""Current-weather data models."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

FAVORITES_TOKEN = "favorites"
UNKNOWN = "Unknown"


class UnitSelector(StrEnum):
    CELSIUS = "C"
    FAHRENHEIT = "F"

    @classmethod
    def from_flag(cls, flag: str) -> "UnitSelector":
        """Parse a single-character unit flag, case-insensitively."""
        try:
            return cls(flag.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown unit {flag!r}, expected C or F") from None


@dataclass(frozen=True)
class WeatherReport:
    city: str = UNKNOWN
    country: str = UNKNOWN
    condition: str = UNKNOWN
    description: str = UNKNOWN
    temp_k: float = 0.0
    feels_like_k: float = 0.0
    humidity: int = 0
    sunrise: int = 0  # epoch seconds, UTC
    sunset: int = 0
    visibility: int = 0  # meters
    wind_speed: float = 0.0  # m/s
    wind_deg: int = 0
    cloudiness: int = 0  # percent
    pressure: int = 0  # hPa
    sea_level: int = 0
    grnd_level: int = 0
    temp_min_k: float = 0.0
    temp_max_k: float = 0.0


@dataclass(frozen=True)
class Success:
    report: WeatherReport


@dataclass(frozen=True)
class Failure:
    city: str
    reason: str


FetchOutcome: TypeAlias = Success | Failure
