# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Registration, login, logout and the current-user lookup.
#
# Login creates a server-side session and sets it as an HTTP-only cookie.
# Responses never include password hashes.
# =============================================================================

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from app.auth.dependencies import get_current_user, get_session_token
from app.auth.models import AuthUser
from app.dependencies import SessionServiceDep, SettingsDep, UserServiceDep
from core.models.user import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserPublic,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, users: UserServiceDep) -> RegisterResponse:
    """
    Create an account.

    Raises:
        400: Missing username/password, or username already taken
    """
    user = users.register(request.username, request.password)
    return RegisterResponse(user=UserPublic.from_db_row(user))


@router.post("/login", response_model=LoginResponse)
def login(
    request: LoginRequest,
    response: Response,
    users: UserServiceDep,
    sessions: SessionServiceDep,
    settings: SettingsDep,
) -> LoginResponse:
    """
    Log in with username and password.

    On success a session is created and its token is set as a cookie
    (and returned in the body for API clients).

    Raises:
        401: Unknown username or wrong password
    """
    user = users.authenticate(request.username, request.password)
    session, token = sessions.create_session(user["id"])

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.session_ttl_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.SESSION_COOKIE_SECURE,
    )

    logger.info(f"User {user['id']} logged in")
    return LoginResponse(user=UserPublic.from_db_row(user), token=token)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    sessions: SessionServiceDep,
    settings: SettingsDep,
    token: Optional[str] = Depends(get_session_token),
) -> MessageResponse:
    """
    End the current session.

    Always succeeds; logging out without a session is a no-op.
    """
    if token:
        sessions.revoke(token)
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserPublic)
def get_current_user_info(user: AuthUser = Depends(get_current_user)) -> UserPublic:
    """
    Get the authenticated user's profile.

    Raises:
        401: If not authenticated
    """
    return UserPublic(id=user.id, username=user.username)
