# =============================================================================
# lib/weather_client.py - OpenWeatherMap Client
# =============================================================================
# Thin httpx wrapper around the OpenWeatherMap "current weather" endpoint.
# The JSON body is returned exactly as the API sent it.
#
# No caching, no retries: every call is one upstream round trip, bounded by
# the configured timeout.
#
# Usage:
#   from lib.weather_client import WeatherClient
#   client = WeatherClient.from_settings(settings)
#   data = client.current_weather("London")
#   print(data["main"]["temp"])
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

import httpx

from app.config import Settings
from app.exceptions import MissingApiKeyError, WeatherUpstreamError

logger = logging.getLogger(__name__)


class WeatherClient:
    """
    Client for the OpenWeatherMap REST API.

    Holds one pooled httpx.Client for the lifetime of the process; call
    close() on shutdown.
    """

    def __init__(
        self,
        api_key: str | None,
        base_url: str = "https://api.openweathermap.org/data/2.5",
        units: str = "metric",
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        self.api_key = api_key
        self.units = units
        self.http = httpx.Client(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(cls, settings: Settings) -> WeatherClient:
        return cls(
            api_key=settings.OPENWEATHER_API_KEY,
            base_url=settings.OPENWEATHER_BASE_URL,
            units=settings.WEATHER_UNITS,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
        )

    def current_weather(self, city: str) -> dict[str, Any]:
        """
        Fetch current weather for a city.

        Args:
            city: City name, e.g. "London" or "Paris,FR"

        Returns:
            The upstream JSON object, unmodified

        Raises:
            MissingApiKeyError: If no API key is configured
            WeatherUpstreamError: On network errors, non-2xx answers or a
                body that is not a JSON object
        """
        if not self.api_key:
            raise MissingApiKeyError("OPENWEATHER_API_KEY")

        params = {"q": city, "appid": self.api_key, "units": self.units}

        try:
            response = self.http.get("/weather", params=params)
            response.raise_for_status()
            data = response.json()

        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.warning(f"Weather API returned {status} for city={city!r}")
            raise WeatherUpstreamError(city, f"Upstream returned HTTP {status}", upstream_status=status)

        except httpx.HTTPError as e:
            logger.warning(f"Weather API request failed for city={city!r}: {type(e).__name__}")
            raise WeatherUpstreamError(city, f"{type(e).__name__}: {e}")

        except ValueError:
            logger.warning(f"Weather API returned a non-JSON body for city={city!r}")
            raise WeatherUpstreamError(city, "Malformed JSON body")

        if not isinstance(data, dict):
            raise WeatherUpstreamError(city, "Expected a JSON object")

        return data

    def close(self) -> None:
        self.http.close()
