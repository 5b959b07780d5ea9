# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: Registration/login requests and the public user record
# - session.py: Server-side login sessions
# - city.py: Saved city requests/responses
# - chat.py: Chat relay requests/responses and stored exchanges
# - weather.py: Weather proxy responses
#
# These models define the "contract" between API and clients.
# =============================================================================

# -----------------------------------------------------------------------------
# User Models - Registration and login
# -----------------------------------------------------------------------------
from .user import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)

# -----------------------------------------------------------------------------
# Session Models - Server-side login sessions
# -----------------------------------------------------------------------------
from .session import AuthSession

# -----------------------------------------------------------------------------
# City Models - Saved cities
# -----------------------------------------------------------------------------
from .city import (
    CityCreate,
    CityResponse,
    CitySavedResponse,
)

# -----------------------------------------------------------------------------
# Chat Models - Chat relay
# -----------------------------------------------------------------------------
from .chat import (
    EMPTY_MESSAGE_REPLY,
    FALLBACK_REPLY,
    ChatRecord,
    ChatRequest,
    ChatResponse,
    ChatStatus,
)

# -----------------------------------------------------------------------------
# Weather Models
# -----------------------------------------------------------------------------
from .weather import ApiKeyResponse

__all__ = [
    # User
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "RegisterRequest",
    "RegisterResponse",
    "UserPublic",
    # Session
    "AuthSession",
    # City
    "CityCreate",
    "CityResponse",
    "CitySavedResponse",
    # Chat
    "EMPTY_MESSAGE_REPLY",
    "FALLBACK_REPLY",
    "ChatRecord",
    "ChatRequest",
    "ChatResponse",
    "ChatStatus",
    # Weather
    "ApiKeyResponse",
]
