# =============================================================================
# core/services/weather_service.py - Weather Proxy
# =============================================================================

from typing import Any

from app.exceptions import MissingFieldError
from lib.weather_client import WeatherClient


class WeatherService:
    """Validates the city and relays the upstream weather payload."""

    def __init__(self, client: WeatherClient):
        self.client = client

    def get_weather(self, city: str | None) -> dict[str, Any]:
        """
        Raises:
            MissingFieldError: If no city was given
            MissingApiKeyError: If the weather API key is unset
            WeatherUpstreamError: If the upstream call fails
        """
        name = (city or "").strip()
        if not name:
            raise MissingFieldError("City is required", fields=["city"])
        return self.client.current_weather(name)
