# =============================================================================
# core/models/user.py - User & Auth Schemas
# =============================================================================
# These models define the API contract for registration and login:
# - RegisterRequest / LoginRequest: credentials sent by the client
# - UserPublic: a user record with all credential material removed
# - RegisterResponse / LoginResponse: what the client gets back
#
# Request fields are optional at the schema level so that a missing field is
# reported by the service layer as a 400 with a clear message.
# =============================================================================

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    """
    Schema for creating an account.

    Example:
        {"username": "alice", "password": "correct horse battery staple"}
    """
    username: str | None = Field(
        default=None,
        max_length=64,
        description="Unique username"
    )
    password: str | None = Field(
        default=None,
        description="Plaintext password (hashed before storage)"
    )


class LoginRequest(BaseModel):
    """Schema for logging in."""
    username: str | None = None
    password: str | None = None


class UserPublic(BaseModel):
    """
    A user as returned to clients.

    Never carries the password hash.
    """
    id: str
    username: str
    created_at: datetime | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "UserPublic":
        """Build from a users row, dropping password_hash and anything else unknown."""
        return cls(
            id=str(row["id"]),
            username=row["username"],
            created_at=row.get("created_at"),
        )


class RegisterResponse(BaseModel):
    message: str = Field(default="User registered successfully")
    user: UserPublic


class LoginResponse(BaseModel):
    """
    Returned by POST /login.

    The token is also set as an HTTP-only cookie; API clients that cannot
    keep cookies send it back as `Authorization: Bearer <token>`.
    """
    message: str = Field(default="Login successful")
    user: UserPublic
    token: str


class MessageResponse(BaseModel):
    """Plain acknowledgement."""
    message: str
