# =============================================================================
# tests/test_passwords.py - Password Hashing Tests
# =============================================================================

import pytest

from lib.passwords import MAX_PASSWORD_BYTES, hash_password, verify_password


class TestHashPassword:
    """Tests for hash_password."""

    def test_hash_is_not_plaintext(self):
        """The stored value must never be the password itself."""
        hashed = hash_password("hunter2")
        assert hashed != "hunter2"
        assert hashed.startswith("$2")

    def test_hash_is_salted(self):
        """Hashing the same password twice gives different hashes."""
        assert hash_password("hunter2") != hash_password("hunter2")

    def test_rejects_overlong_password(self):
        with pytest.raises(ValueError):
            hash_password("x" * (MAX_PASSWORD_BYTES + 1))

    def test_accepts_password_at_limit(self):
        hashed = hash_password("x" * MAX_PASSWORD_BYTES)
        assert verify_password("x" * MAX_PASSWORD_BYTES, hashed)


class TestVerifyPassword:
    """Tests for verify_password."""

    def test_correct_password(self):
        assert verify_password("hunter2", hash_password("hunter2"))

    def test_wrong_password(self):
        assert not verify_password("hunter3", hash_password("hunter2"))

    def test_empty_inputs(self):
        assert not verify_password("", hash_password("hunter2"))
        assert not verify_password("hunter2", "")

    def test_malformed_hash_returns_false(self):
        """A corrupt stored hash is a failed login, not a crash."""
        assert not verify_password("hunter2", "not-a-bcrypt-hash")
