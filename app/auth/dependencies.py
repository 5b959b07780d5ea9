# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication.
#
# The session token is read from the session cookie set by POST /login, or
# from an `Authorization: Bearer <token>` header for clients without cookies.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.get("/protected")
#   def protected(user: AuthUser = Depends(get_current_user)):
#       return {"user_id": user.id}
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.auth.models import AuthUser
from app.dependencies import SessionServiceDep, SettingsDep
from app.exceptions import NotAuthenticatedError

logger = logging.getLogger(__name__)

# Bearer tokens are optional; browsers send the cookie
security_optional = HTTPBearer(auto_error=False)


def get_session_token(
    request: Request,
    settings: SettingsDep,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_optional),
) -> Optional[str]:
    """
    Return the raw session token sent with the request, if any.

    An explicit Bearer header takes precedence over the cookie.
    """
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def get_current_user(
    sessions: SessionServiceDep,
    token: Optional[str] = Depends(get_session_token),
) -> AuthUser:
    """
    Resolve the authenticated user for this request.

    This dependency:
    1. Reads the session token (cookie or Bearer header)
    2. Verifies its signature and expiry
    3. Loads the server-side session and its user

    Raises:
        NotAuthenticatedError: 401 if any step fails
    """
    if not token:
        raise NotAuthenticatedError()

    session, user = sessions.resolve(token)

    logger.debug(f"Authenticated user: {user['id']}")
    return AuthUser(id=str(user["id"]), username=user["username"], session_id=session.id)
