"""Weather fetcher: one lookup per city, normalized into a WeatherReport."""

import logging
import math
from typing import Any

from weathercli.ingest.owm_client import OwmClient, WeatherClientError
from weathercli.models.weather import (
    UNKNOWN,
    Failure,
    FetchOutcome,
    Success,
    WeatherReport,
)

logger = logging.getLogger(__name__)


class WeatherFetcher:
    def __init__(self, client: OwmClient):
        self.client = client

    def fetch(self, city: str, api_key: str) -> FetchOutcome:
        """Look up a city once. Per-city problems come back as Failure."""
        logger.info("Getting weather information for: %s", city)
        try:
            raw = self.client.get_current_weather(city, api_key)
        except WeatherClientError as e:
            logger.warning("Weather lookup for %s failed: %s", city, e)
            return Failure(city=city, reason=str(e))
        return Success(extract_report(raw))


def extract_report(raw: dict) -> WeatherReport:
    """Build a WeatherReport from an OWM response, defaulting absent fields."""
    weather = _dig(raw, "weather")
    first = weather[0] if isinstance(weather, list) and weather else {}

    return WeatherReport(
        city=_str(_dig(raw, "name")),
        country=_str(_dig(raw, "sys", "country")),
        condition=_str(_dig(first, "main")),
        description=_str(_dig(first, "description")),
        temp_k=_float(_dig(raw, "main", "temp")),
        feels_like_k=_float(_dig(raw, "main", "feels_like")),
        humidity=_int(_dig(raw, "main", "humidity")),
        sunrise=_int(_dig(raw, "sys", "sunrise")),
        sunset=_int(_dig(raw, "sys", "sunset")),
        visibility=_int(_dig(raw, "visibility")),
        wind_speed=_float(_dig(raw, "wind", "speed")),
        wind_deg=_int(_dig(raw, "wind", "deg")),
        cloudiness=_int(_dig(raw, "clouds", "all")),
        pressure=_int(_dig(raw, "main", "pressure")),
        sea_level=_int(_dig(raw, "main", "sea_level")),
        grnd_level=_int(_dig(raw, "main", "grnd_level")),
        temp_min_k=_float(_dig(raw, "main", "temp_min")),
        temp_max_k=_float(_dig(raw, "main", "temp_max")),
    )


def _dig(obj: Any, *keys: str) -> Any:
    for key in keys:
        if not isinstance(obj, dict):
            return None
        obj = obj.get(key)
    return obj


def _is_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _str(value: Any) -> str:
    return value if isinstance(value, str) else UNKNOWN


def _float(value: Any) -> float:
    return float(value) if _is_number(value) else 0.0


def _int(value: Any) -> int:
    return int(value) if _is_number(value) else 0
