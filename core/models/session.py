# =============================================================================
# core/models/session.py - Login Session Schemas
# =============================================================================
# A login session is a row in auth_sessions. The client holds a signed token
# naming the session id; the row decides whether it is still valid.
#
# Timestamps arrive from PostgREST as ISO 8601 strings and are parsed by
# pydantic. Naive values are taken to be UTC.
# =============================================================================

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, field_validator


class AuthSession(BaseModel):
    """Server-side record of one login."""
    id: str
    user_id: str
    expires_at: datetime
    created_at: datetime | None = None

    @field_validator("expires_at", "created_at")
    @classmethod
    def assume_utc(cls, value: datetime | None) -> datetime | None:
        if value is not None and value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "AuthSession":
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            expires_at=row["expires_at"],
            created_at=row.get("created_at"),
        )

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at <= now
