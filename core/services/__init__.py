# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .user_service import UserService
from .session_service import SessionService
from .city_service import CityService
from .weather_service import WeatherService
from .chat_service import ChatService

__all__ = [
    "UserService",
    "SessionService",
    "CityService",
    "WeatherService",
    "ChatService",
]
