# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase database operations on
# the four tables the API uses:
# - users:          registered accounts (username + bcrypt hash)
# - cities:         saved cities, unique per (name, user_id)
# - chats:          append-only log of chat exchanges
# - auth_sessions:  server-side login sessions
#
# One wrapper is built per process (see app/dependencies.py) and handed to
# the services that need it.
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   db = SupabaseClient.from_settings(settings)
#   user = db.fetch_user_by_username("alice")
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any
from uuid import UUID

from supabase import create_client, Client

from app.config import Settings
from app.exceptions import DatabaseError
from lib.utils import normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# Postgres error code for unique_violation
UNIQUE_VIOLATION = "23505"

USERS_TABLE = "users"
CITIES_TABLE = "cities"
CHATS_TABLE = "chats"
AUTH_SESSIONS_TABLE = "auth_sessions"


class SupabaseClientError(DatabaseError):
    """
    Error during Supabase operations.

    Rendered as a 500 by the API exception handler.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message, code=code, details=details)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class DuplicateRecordError(SupabaseClientError):
    """Raised when an insert violates a unique constraint."""

    def __init__(self, table: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=f"Duplicate record in {table}",
            code="DUPLICATE_RECORD",
            details={"table": table, **(details or {})},
        )


class SupabaseClient:
    """
    Typed wrapper for Supabase database operations.

    Wraps a supabase-py `Client` (or anything exposing the same
    `table(...).select(...).eq(...).execute()` query builder).

    Example:
        db = SupabaseClient.from_settings(settings)
        city = db.insert_city(user_id="550e8400-...", name="London")
        cities = db.list_cities(user_id="550e8400-...")
    """

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> SupabaseClient:
        """
        Create a wrapper around a new supabase-py client.

        Uses the service_role key which bypasses Row Level Security (RLS).
        This is appropriate for server-side operations.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            client = create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_KEY)
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
            )
        logger.info("Supabase client initialized successfully")
        return cls(client)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _fetch_first(self, table: str, filters: dict[str, Any]) -> dict[str, Any] | None:
        """Return the first row matching all equality filters, or None."""
        query = self.client.table(table).select("*")
        for column, value in filters.items():
            query = query.eq(column, value)

        try:
            response = query.limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="QUERY_FAILED",
                details={"table": table},
            )

        rows = response.data or []
        return rows[0] if rows else None

    def _insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert one row and return it as stored."""
        try:
            response = self.client.table(table).insert(data).execute()
        except Exception as e:
            if UNIQUE_VIOLATION in str(e):
                raise DuplicateRecordError(table)
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
            )

        if response.data:
            return response.data[0]
        raise SupabaseClientError(
            message="Insert returned no data",
            code="INSERT_NO_DATA",
            details={"table": table},
        )

    # -------------------------------------------------------------------------
    # Users
    # -------------------------------------------------------------------------

    def fetch_user_by_username(self, username: str) -> dict[str, Any] | None:
        return self._fetch_first(USERS_TABLE, {"username": username})

    def fetch_user(self, user_id: str | UUID) -> dict[str, Any] | None:
        return self._fetch_first(USERS_TABLE, {"id": normalize_uuid(user_id)})

    def insert_user(self, username: str, password_hash: str) -> dict[str, Any]:
        """
        Insert a new user.

        Raises:
            DuplicateRecordError: If the username already exists
            SupabaseClientError: If the insert fails otherwise
        """
        return self._insert(USERS_TABLE, {
            "username": username,
            "password_hash": password_hash,
        })

    # -------------------------------------------------------------------------
    # Cities
    # -------------------------------------------------------------------------

    def fetch_city(self, user_id: str | UUID, name: str) -> dict[str, Any] | None:
        return self._fetch_first(CITIES_TABLE, {
            "user_id": normalize_uuid(user_id),
            "name": name,
        })

    def list_cities(self, user_id: str | UUID) -> list[dict[str, Any]]:
        """
        Fetch every city saved by one user, oldest first.

        Raises:
            SupabaseClientError: If query fails
        """
        user_id_str = normalize_uuid(user_id)

        try:
            response = (
                self.client.table(CITIES_TABLE)
                .select("*")
                .eq("user_id", user_id_str)
                .order("created_at")
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch cities: {e}",
                code="FETCH_CITIES_FAILED",
                details={"user_id": user_id_str},
            )

        cities = response.data or []
        logger.debug(f"Fetched {len(cities)} cities for user {user_id_str}")
        return cities

    def insert_city(self, user_id: str | UUID, name: str) -> dict[str, Any]:
        """
        Insert a saved city.

        Raises:
            DuplicateRecordError: If the user already saved this city
            SupabaseClientError: If the insert fails otherwise
        """
        return self._insert(CITIES_TABLE, {
            "user_id": normalize_uuid(user_id),
            "name": name,
        })

    # -------------------------------------------------------------------------
    # Chats
    # -------------------------------------------------------------------------

    def insert_chat(self, user_message: str, bot_message: str) -> dict[str, Any]:
        """Append one exchange to the chat log. created_at is set by the database."""
        return self._insert(CHATS_TABLE, {
            "user_message": user_message,
            "bot_message": bot_message,
        })

    # -------------------------------------------------------------------------
    # Auth Sessions
    # -------------------------------------------------------------------------

    def insert_auth_session(self, user_id: str | UUID, expires_at: datetime) -> dict[str, Any]:
        return self._insert(AUTH_SESSIONS_TABLE, {
            "user_id": normalize_uuid(user_id),
            "expires_at": expires_at.isoformat(),
        })

    def fetch_auth_session(self, session_id: str | UUID) -> dict[str, Any] | None:
        return self._fetch_first(AUTH_SESSIONS_TABLE, {"id": normalize_uuid(session_id)})

    def delete_auth_session(self, session_id: str | UUID) -> None:
        session_id_str = normalize_uuid(session_id)

        try:
            self.client.table(AUTH_SESSIONS_TABLE).delete().eq("id", session_id_str).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete session: {e}",
                code="DELETE_SESSION_FAILED",
                details={"session_id": session_id_str},
            )

    def delete_expired_auth_sessions(self, now: datetime) -> int:
        """Remove every session that expired before `now`. Returns the number removed."""
        try:
            response = (
                self.client.table(AUTH_SESSIONS_TABLE)
                .delete()
                .lt("expires_at", now.isoformat())
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to purge expired sessions: {e}",
                code="PURGE_SESSIONS_FAILED",
            )

        purged = len(response.data or [])
        if purged:
            logger.info(f"Purged {purged} expired sessions")
        return purged

    # -------------------------------------------------------------------------
    # Health
    # -------------------------------------------------------------------------

    def ping(self) -> None:
        """Run a trivial query; raises SupabaseClientError if the database is unreachable."""
        try:
            self.client.table(USERS_TABLE).select("id").limit(1).execute()
        except Exception as e:
            raise SupabaseClientError(
                message=f"Database ping failed: {e}",
                code="PING_FAILED",
            )
