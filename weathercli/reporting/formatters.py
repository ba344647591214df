"""Output formatters for weather reports, failures and favorites."""

import json
import sys
from typing import TextIO

from weathercli.models.weather import Failure, UnitSelector, WeatherReport
from weathercli.reporting.timefmt import to_local_time
from weathercli.reporting.units import to_display


def _temp(kelvin: float, unit: UnitSelector) -> str:
    value, label = to_display(kelvin, unit)
    return f"{value:.2f} {label}"


def format_report_text(
    r: WeatherReport, unit: UnitSelector, details: bool = False
) -> str:
    """Plain text block for one city."""
    lines = [
        f"Weather in {r.city}, {r.country}:",
        f"  Condition: {r.condition} ({r.description})",
        f"  Temperature: {_temp(r.temp_k, unit)}",
        f"  Feels like: {_temp(r.feels_like_k, unit)}",
        f"  Humidity: {r.humidity}%",
        f"  Sunrise: {to_local_time(r.sunrise)}",
        f"  Sunset: {to_local_time(r.sunset)}",
    ]
    if details:
        lines += [
            f"  Visibility: {r.visibility} m",
            f"  Wind: {r.wind_speed} m/s at {r.wind_deg}°",
            f"  Cloudiness: {r.cloudiness}%",
            f"  Pressure: {r.pressure} hPa",
            f"  Sea-level pressure: {r.sea_level} hPa",
            f"  Ground-level pressure: {r.grnd_level} hPa",
            f"  Min temperature: {_temp(r.temp_min_k, unit)}",
            f"  Max temperature: {_temp(r.temp_max_k, unit)}",
        ]
    return "\n".join(lines)


def format_report_json(
    r: WeatherReport, unit: UnitSelector, details: bool = False
) -> str:
    """JSON document for programmatic consumption."""
    temp, label = to_display(r.temp_k, unit)
    feels_like, _ = to_display(r.feels_like_k, unit)
    data: dict = {
        "city": r.city,
        "country": r.country,
        "condition": r.condition,
        "description": r.description,
        "unit": label,
        "temperature": round(temp, 2),
        "feels_like": round(feels_like, 2),
        "humidity": r.humidity,
        "sunrise": to_local_time(r.sunrise),
        "sunset": to_local_time(r.sunset),
    }
    if details:
        temp_min, _ = to_display(r.temp_min_k, unit)
        temp_max, _ = to_display(r.temp_max_k, unit)
        data.update(
            {
                "visibility_m": r.visibility,
                "wind_speed_ms": r.wind_speed,
                "wind_deg": r.wind_deg,
                "cloudiness": r.cloudiness,
                "pressure_hpa": r.pressure,
                "sea_level_hpa": r.sea_level,
                "grnd_level_hpa": r.grnd_level,
                "temp_min": round(temp_min, 2),
                "temp_max": round(temp_max, 2),
            }
        )
    return json.dumps(data, indent=2, ensure_ascii=False)


FORMATTERS = {
    "text": format_report_text,
    "json": format_report_json,
}


def render(
    report: WeatherReport,
    unit: UnitSelector,
    details: bool = False,
    out: TextIO | None = None,
    fmt: str = "text",
) -> None:
    """Write one report to ``out`` (stdout by default)."""
    out = out or sys.stdout
    out.write(FORMATTERS[fmt](report, unit, details) + "\n")


def format_failure(failure: Failure) -> str:
    return f"Error fetching weather for {failure.city}: {failure.reason}"


def format_favorites_text(favorites: list[str]) -> str:
    if not favorites:
        return "No favorite cities saved."
    lines = ["Favorite cities:"]
    lines += [f"  {i}. {city}" for i, city in enumerate(favorites, 1)]
    return "\n".join(lines)
