"""Default locations and provider settings."""

from pathlib import Path

CONFIG_DIR = Path("~/.config/weathercli")
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.yaml"
DEFAULT_FAVORITES_PATH = CONFIG_DIR / "favorites.json"

OWM_BASE_URL = "https://api.openweathermap.org"
DEFAULT_API_KEY_ENV = "OPENWEATHERMAP_API_KEY"
VERSION = "1.0.0"
DEFAULT_USER_AGENT = f"weathercli/{VERSION}"
