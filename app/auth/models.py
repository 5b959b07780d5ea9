# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, ConfigDict


class AuthUser(BaseModel):
    """
    The user behind an authenticated request.

    Resolved from the session token on every request that needs it.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    session_id: str
