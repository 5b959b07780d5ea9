# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: GET /api status and health check endpoints
# - cities.py: Saved cities (session required)
# - weather.py: Weather proxy and weather API key
# - chat.py: Chat relay
#
# Authentication routes live in app/auth/routes.py.
# Each router is mounted in main.py with a URL prefix.
# =============================================================================

from . import health
from . import cities
from . import weather
from . import chat

__all__ = [
    "health",
    "cities",
    "weather",
    "chat",
]
