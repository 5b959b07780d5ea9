# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
#
# The database wrapper, the weather client and the chat assistant are each
# built once per process (lru_cache) and handed to route handlers through
# Depends(). Tests replace them with app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from agents.chat_assistant import ChatAssistant
from app.config import Settings, get_settings
from core.services import (
    ChatService,
    CityService,
    SessionService,
    UserService,
    WeatherService,
)
from lib.supabase_client import SupabaseClient
from lib.weather_client import WeatherClient


# =============================================================================
# Clients (one per process)
# =============================================================================

@lru_cache
def get_database() -> SupabaseClient:
    """Get the process-wide Supabase wrapper."""
    return SupabaseClient.from_settings(get_settings())


@lru_cache
def get_weather_client() -> WeatherClient:
    """Get the process-wide OpenWeatherMap client."""
    return WeatherClient.from_settings(get_settings())


@lru_cache
def get_chat_assistant() -> ChatAssistant:
    """Get the process-wide OpenAI chat assistant."""
    return ChatAssistant.from_settings(get_settings())


def close_clients() -> None:
    """Release pooled connections held by clients that were created."""
    if get_weather_client.cache_info().currsize:
        get_weather_client().close()
        get_weather_client.cache_clear()
    if get_chat_assistant.cache_info().currsize:
        get_chat_assistant().close()
        get_chat_assistant.cache_clear()


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]
DatabaseDep = Annotated[SupabaseClient, Depends(get_database)]
WeatherClientDep = Annotated[WeatherClient, Depends(get_weather_client)]
ChatAssistantDep = Annotated[ChatAssistant, Depends(get_chat_assistant)]


# =============================================================================
# Services
# =============================================================================

def get_user_service(db: DatabaseDep) -> UserService:
    return UserService(db)


def get_session_service(db: DatabaseDep, settings: SettingsDep) -> SessionService:
    return SessionService(db, settings)


def get_city_service(db: DatabaseDep) -> CityService:
    return CityService(db)


def get_weather_service(client: WeatherClientDep) -> WeatherService:
    return WeatherService(client)


def get_chat_service(db: DatabaseDep, assistant: ChatAssistantDep) -> ChatService:
    return ChatService(db, assistant)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
SessionServiceDep = Annotated[SessionService, Depends(get_session_service)]
CityServiceDep = Annotated[CityService, Depends(get_city_service)]
WeatherServiceDep = Annotated[WeatherService, Depends(get_weather_service)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
