# =============================================================================
# core/services/session_service.py - Login Sessions
# =============================================================================
# Server-side sessions stored in the auth_sessions table.
#
# The client holds a token signed with SESSION_SECRET (HS256 JWT) carrying
# the session id (`sid`) and user id (`sub`). A token is only honoured while
# its auth_sessions row exists and has not expired, so deleting the row
# (logout) invalidates the token immediately.
#
# Expired rows are removed when they are presented and, for sessions nobody
# presents again, whenever a new session is created.
# =============================================================================

import logging
from datetime import timedelta
from typing import Any
from uuid import UUID

from jose import ExpiredSignatureError, JWTError, jwt

from app.config import Settings
from app.exceptions import NotAuthenticatedError
from core.models.session import AuthSession
from lib.supabase_client import SupabaseClient
from lib.utils import utcnow

logger = logging.getLogger(__name__)

TOKEN_ALGORITHM = "HS256"


class SessionService:
    """
    Service for creating, resolving and revoking login sessions.

    Example:
        sessions = SessionService(db, settings)
        session, token = sessions.create_session(user["id"])
        session, user = sessions.resolve(token)
        sessions.revoke(token)
    """

    def __init__(self, db: SupabaseClient, settings: Settings):
        self.db = db
        self.secret = settings.SESSION_SECRET
        self.ttl = timedelta(seconds=settings.session_ttl_seconds)

    def create_session(self, user_id: str | UUID) -> tuple[AuthSession, str]:
        """
        Start a session for a user who just proved their credentials.

        Returns:
            Tuple of (stored session, signed token for the client)
        """
        now = utcnow()
        self.db.delete_expired_auth_sessions(now)
        row = self.db.insert_auth_session(user_id, expires_at=now + self.ttl)
        session = AuthSession.from_db_row(row)

        token = jwt.encode(
            {
                "sid": session.id,
                "sub": session.user_id,
                "iat": int(now.timestamp()),
                "exp": int(session.expires_at.timestamp()),
            },
            self.secret,
            algorithm=TOKEN_ALGORITHM,
        )

        logger.info(f"Created session {session.id} for user {session.user_id}")
        return session, token

    def _decode(self, token: str, verify_exp: bool = True) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[TOKEN_ALGORITHM],
                options={"verify_exp": verify_exp},
            )
        except ExpiredSignatureError:
            raise NotAuthenticatedError("Session has expired")
        except JWTError as e:
            logger.warning(f"Session token rejected: {e}")
            raise NotAuthenticatedError("Invalid session")

    def resolve(self, token: str) -> tuple[AuthSession, dict[str, Any]]:
        """
        Turn a client token into the session and its user.

        Raises:
            NotAuthenticatedError: If the token is invalid or expired, the
                session was revoked, or the user no longer exists
        """
        payload = self._decode(token)

        session_id = payload.get("sid")
        if not session_id:
            raise NotAuthenticatedError("Invalid session")

        row = self.db.fetch_auth_session(session_id)
        if not row:
            raise NotAuthenticatedError("Session not found")

        session = AuthSession.from_db_row(row)
        if session.user_id != payload.get("sub"):
            raise NotAuthenticatedError("Invalid session")

        if session.is_expired(utcnow()):
            self.db.delete_auth_session(session.id)
            raise NotAuthenticatedError("Session has expired")

        user = self.db.fetch_user(session.user_id)
        if not user:
            raise NotAuthenticatedError("Session user no longer exists")

        return session, user

    def revoke(self, token: str) -> None:
        """
        Delete the session a token refers to.

        Tokens that do not verify are ignored; there is nothing to revoke.
        Expired tokens still have their row removed.
        """
        try:
            payload = self._decode(token, verify_exp=False)
        except NotAuthenticatedError:
            return

        session_id = payload.get("sid")
        if session_id:
            self.db.delete_auth_session(session_id)
            logger.info(f"Revoked session {session_id}")
