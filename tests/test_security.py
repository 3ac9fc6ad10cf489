"""Tests for security functions."""
from salesledger.core.security import hash_password, verify_password


class TestPasswordHashing:
    """Test password hashing and verification."""

    def test_hash_password_returns_string(self):
        """Test that hash_password returns a non-empty string that is not the password."""
        hashed = hash_password("123456")

        assert isinstance(hashed, str)
        assert hashed != "123456"

    def test_hash_password_different_outputs(self):
        """Test that hashing same password produces different outputs (different salts)."""
        assert hash_password("MySecurePassword123") != hash_password("MySecurePassword123")

    def test_verify_password_correct(self):
        hashed = hash_password("MySecurePassword123")
        assert verify_password("MySecurePassword123", hashed) is True

    def test_verify_password_incorrect(self):
        hashed = hash_password("MySecurePassword123")
        assert verify_password("WrongPassword456", hashed) is False

    def test_verify_password_empty_string(self):
        hashed = hash_password("MySecurePassword123")
        assert verify_password("", hashed) is False

    def test_verify_password_malformed_hash(self):
        assert verify_password("MySecurePassword123", "not-a-bcrypt-hash") is False

    def test_hash_password_unicode(self):
        hashed = hash_password("Senha-çãé-密码")

        assert verify_password("Senha-çãé-密码", hashed) is True
        assert verify_password("Senha-çãé", hashed) is False
