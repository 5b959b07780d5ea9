# =============================================================================
# core/services/city_service.py - Saved Cities
# =============================================================================
# Each user keeps a list of city names. A user cannot save the same name
# twice; the check happens here and again via the (name, user_id) unique
# constraint in the database.
# =============================================================================

import logging
from typing import Any
from uuid import UUID

from app.exceptions import CityAlreadySavedError, MissingFieldError
from lib.supabase_client import DuplicateRecordError, SupabaseClient

logger = logging.getLogger(__name__)


class CityService:
    """Service for saving and listing a user's cities."""

    def __init__(self, db: SupabaseClient):
        self.db = db

    def save_city(self, user_id: str | UUID, city: str | None) -> dict[str, Any]:
        """
        Save a city for a user.

        Raises:
            MissingFieldError: If the city name is absent or blank
            CityAlreadySavedError: If the user already saved this city
        """
        name = (city or "").strip()
        if not name:
            raise MissingFieldError("City name required", fields=["city"])

        if self.db.fetch_city(user_id, name):
            raise CityAlreadySavedError(name)

        try:
            saved = self.db.insert_city(user_id, name)
        except DuplicateRecordError:
            raise CityAlreadySavedError(name)

        logger.info(f"User {user_id} saved city {name!r}")
        return saved

    def list_cities(self, user_id: str | UUID) -> list[dict[str, Any]]:
        """Return only the cities owned by this user."""
        return self.db.list_cities(user_id)
