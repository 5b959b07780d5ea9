# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable clients and helpers:
# - supabase_client.py: Typed Supabase wrapper for database operations
# - weather_client.py: OpenWeatherMap client (httpx)
# - passwords.py: bcrypt password hashing
# - utils.py: Shared utilities (UUID normalization, timestamps)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError, DuplicateRecordError
from lib.weather_client import WeatherClient
from lib.passwords import hash_password, verify_password
from lib.utils import normalize_uuid

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "DuplicateRecordError",
    # Weather
    "WeatherClient",
    # Passwords
    "hash_password",
    "verify_password",
    # Utils
    "normalize_uuid",
]
