"""OpenWeatherMap current-weather API client."""

import json
import logging

import httpx

from weathercli.config.defaults import DEFAULT_USER_AGENT, OWM_BASE_URL

logger = logging.getLogger(__name__)

CURRENT_WEATHER_PATH = "/data/2.5/weather"


class WeatherClientError(Exception):
    """Base for failures of a single provider lookup."""


class TransportError(WeatherClientError):
    """Network-level failure: timeout, connection refused, DNS."""


class ProviderError(WeatherClientError):
    """Provider answered with a non-success status."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(WeatherClientError):
    """Response body is not a JSON object."""


class OwmClient:
    def __init__(
        self,
        base_url: str = OWM_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.user_agent = user_agent
        self.timeout = timeout

    def get_current_weather(self, city: str, api_key: str) -> dict:
        """Fetch current conditions for a city name. One request, no retry."""
        url = f"{self.base_url}{CURRENT_WEATHER_PATH}"
        params = {"q": city, "appid": api_key}
        headers = {"User-Agent": self.user_agent, "Accept": "application/json"}
        kwargs: dict = {"params": params, "headers": headers}
        # Leave httpx's default timeout in place unless one is configured.
        if self.timeout is not None:
            kwargs["timeout"] = self.timeout

        try:
            resp = httpx.get(url, **kwargs)
        except httpx.RequestError as e:
            logger.info("OWM request for %s failed: %s", city, e)
            raise TransportError(f"Request failed: {e}") from e

        if not resp.is_success:
            message = _provider_message(resp)
            logger.info("OWM %d for %s: %s", resp.status_code, city, message)
            detail = f": {message}" if message else ""
            raise ProviderError(f"HTTP {resp.status_code}{detail}", resp.status_code)

        try:
            data = resp.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise MalformedResponseError(f"Invalid JSON in response: {e}") from e
        if not isinstance(data, dict):
            raise MalformedResponseError(
                f"Expected a JSON object, got {type(data).__name__}"
            )
        return data


def _provider_message(resp: httpx.Response) -> str:
    """Extract OWM's error message from a failed response, if any."""
    try:
        body = resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return resp.text.strip()[:200]
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return ""
