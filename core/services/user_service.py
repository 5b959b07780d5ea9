# =============================================================================
# core/services/user_service.py - User Accounts
# =============================================================================
# Registration and credential checks.
# Passwords are hashed with bcrypt before they reach the database and the
# hash never leaves this layer in a response model.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    InvalidCredentialsError,
    MissingFieldError,
    PasswordTooLongError,
    UsernameTakenError,
)
from lib.passwords import MAX_PASSWORD_BYTES, hash_password, verify_password
from lib.supabase_client import DuplicateRecordError, SupabaseClient

logger = logging.getLogger(__name__)


class UserService:
    """
    Service for user registration and authentication.

    Example:
        users = UserService(db)
        user = users.register("alice", "s3cret")
        same = users.authenticate("alice", "s3cret")
    """

    def __init__(self, db: SupabaseClient):
        self.db = db

    def register(self, username: str | None, password: str | None) -> dict[str, Any]:
        """
        Create a new user.

        Args:
            username: Desired username (surrounding whitespace is ignored)
            password: Plaintext password

        Returns:
            The stored user row (including password_hash; strip before returning)

        Raises:
            MissingFieldError: If either field is absent or blank
            PasswordTooLongError: If the password exceeds bcrypt's limit
            UsernameTakenError: If the username already exists
        """
        username = (username or "").strip()
        if not username or not password:
            missing = [name for name, value in (("username", username), ("password", password)) if not value]
            raise MissingFieldError("Missing fields", fields=missing)

        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise PasswordTooLongError(MAX_PASSWORD_BYTES)

        if self.db.fetch_user_by_username(username):
            raise UsernameTakenError(username)

        try:
            user = self.db.insert_user(username, hash_password(password))
        except DuplicateRecordError:
            # Lost a race with a concurrent registration
            raise UsernameTakenError(username)

        logger.info(f"Registered user: {user['id']}")
        return user

    def authenticate(self, username: str | None, password: str | None) -> dict[str, Any]:
        """
        Check a username/password pair.

        Returns:
            The matching user row

        Raises:
            InvalidCredentialsError: If the user is unknown or the password is wrong
        """
        username = (username or "").strip()
        if not username or not password:
            raise InvalidCredentialsError()

        user = self.db.fetch_user_by_username(username)
        if not user or not verify_password(password, user.get("password_hash", "")):
            logger.warning("Failed login attempt")
            raise InvalidCredentialsError()

        return user
