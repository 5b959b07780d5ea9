# =============================================================================
# lib/passwords.py - Password Hashing
# =============================================================================
# Salted password hashing with bcrypt.
#
# Usage:
#   from lib.passwords import hash_password, verify_password
#   stored = hash_password("hunter2")
#   verify_password("hunter2", stored)  # True
# =============================================================================

import bcrypt

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72

# Cost factor (2^10 rounds)
BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    """
    Hash a plaintext password with a fresh salt.

    Raises:
        ValueError: If the password is longer than MAX_PASSWORD_BYTES
    """
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password exceeds {MAX_PASSWORD_BYTES} bytes")
    return bcrypt.hashpw(encoded, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a candidate password against a stored hash. Never raises."""
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash or over-long candidate
        return False
