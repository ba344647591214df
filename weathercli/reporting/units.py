"""Kelvin temperature conversion for display."""

from weathercli.models.weather import UnitSelector

KELVIN_OFFSET = 273.15


def kelvin_to_celsius(kelvin: float) -> float:
    return kelvin - KELVIN_OFFSET


def kelvin_to_fahrenheit(kelvin: float) -> float:
    return (kelvin - KELVIN_OFFSET) * 9.0 / 5.0 + 32.0


def to_display(kelvin: float, unit: UnitSelector) -> tuple[float, str]:
    """Convert a Kelvin reading to (value, label) in the selected unit."""
    if unit == UnitSelector.FAHRENHEIT:
        return kelvin_to_fahrenheit(kelvin), "°F"
    return kelvin_to_celsius(kelvin), "°C"
