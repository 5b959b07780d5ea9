# =============================================================================
# app/routers/weather.py - Weather Proxy Endpoints
# =============================================================================
# GET /api/weather relays the OpenWeatherMap current-weather payload as-is.
# GET /api/getApiKey hands the weather key to the browser client, which
# calls OpenWeatherMap directly for forecasts and alerts.
# =============================================================================

from typing import Annotated, Any

from fastapi import APIRouter, Query

from app.dependencies import SettingsDep, WeatherServiceDep
from core.models.weather import ApiKeyResponse

router = APIRouter()


@router.get("/weather")
def get_weather(
    weather: WeatherServiceDep,
    city: Annotated[str | None, Query(description="City name, e.g. London")] = None,
) -> dict[str, Any]:
    """
    Current weather for a city, in metric units.

    Raises:
        400: City missing
        500: API key not configured, or the weather API failed
    """
    return weather.get_weather(city)


@router.get("/getApiKey", response_model=ApiKeyResponse)
def get_api_key(settings: SettingsDep) -> ApiKeyResponse:
    """Return the configured weather API key, or an empty string."""
    return ApiKeyResponse(api_key=settings.OPENWEATHER_API_KEY or "")
