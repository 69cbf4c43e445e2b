"""Tests for password hashing and derived passwords."""

import base64

import pytest
from tenantkit.config import PasswordSettings
from tenantkit.core.auth.password import PasswordHasher, generate_derived_password


class TestHashPassword:
    """Test hash generation."""

    def test_hash_has_three_parts(self, hasher: PasswordHasher) -> None:
        """Hash should be iterations, salt and digest joined by dots."""
        iterations, salt, digest = hasher.hash_password("mypassword123").split(".")

        assert iterations == "1000"
        assert len(base64.b64decode(salt)) == 16
        assert len(base64.b64decode(digest)) == 32

    def test_hash_different_each_time(self, hasher: PasswordHasher) -> None:
        """Same password should produce different hashes (salted)."""
        hash1 = hasher.hash_password("mypassword123")
        hash2 = hasher.hash_password("mypassword123")

        assert hash1 != hash2
        assert hasher.verify_password("mypassword123", hash1) is True
        assert hasher.verify_password("mypassword123", hash2) is True

    def test_empty_password_rejected(self, hasher: PasswordHasher) -> None:
        """Should refuse to hash an empty password."""
        with pytest.raises(ValueError):
            hasher.hash_password("")

    def test_configured_sizes_used(self) -> None:
        """Salt and digest lengths follow settings."""
        hasher = PasswordHasher(
            PasswordSettings(secret_key="k", iterations=500, salt_size=8, hash_size=20)
        )
        iterations, salt, digest = hasher.hash_password("pw").split(".")

        assert iterations == "500"
        assert len(base64.b64decode(salt)) == 8
        assert len(base64.b64decode(digest)) == 20


class TestVerifyPassword:
    """Test hash verification."""

    def test_verify_correct(self, hasher: PasswordHasher) -> None:
        """Should return True for correct password."""
        hashed = hasher.hash_password("mypassword123")
        assert hasher.verify_password("mypassword123", hashed) is True

    def test_verify_incorrect(self, hasher: PasswordHasher) -> None:
        """Should return False for a different password."""
        hashed = hasher.hash_password("mypassword123" + "x")
        assert hasher.verify_password("mypassword123", hashed) is False

    def test_verify_empty(self, hasher: PasswordHasher) -> None:
        """Should return False for empty inputs."""
        hashed = hasher.hash_password("mypassword123")
        assert hasher.verify_password("", hashed) is False
        assert hasher.verify_password("mypassword123", "") is False

    @pytest.mark.parametrize(
        "stored",
        [
            "not-a-hash",
            "1000.abc",
            "1000.a.b.c",
            "many.AAAA.AAAA",
            "1000.!!!!.AAAA",
            "0.AAAAAAAAAAAAAAAAAAAAAA==.AAAA",
            "-5.AAAAAAAAAAAAAAAAAAAAAA==.AAAA",
        ],
    )
    def test_malformed_hash_never_raises(self, hasher: PasswordHasher, stored: str) -> None:
        """Malformed hashes verify as False instead of raising."""
        assert hasher.verify_password("mypassword123", stored) is False

    def test_iterations_read_from_hash(self, password_settings: PasswordSettings) -> None:
        """A hash keeps verifying after the configured iteration count changes."""
        old = PasswordHasher(password_settings)
        hashed = old.hash_password("mypassword123")

        new = PasswordHasher(
            PasswordSettings(secret_key=password_settings.secret_key, iterations=2000)
        )
        assert new.verify_password("mypassword123", hashed) is True

    def test_secret_key_participates(self, hasher: PasswordHasher) -> None:
        """A hasher with another secret key rejects the hash."""
        hashed = hasher.hash_password("mypassword123")
        other = PasswordHasher(PasswordSettings(secret_key="other-pepper", iterations=1000))

        assert other.verify_password("mypassword123", hashed) is False


class TestDerivedPassword:
    """Test deterministic initial passwords."""

    def test_documented_example(self) -> None:
        """Email local part and name are truncated to four characters."""
        assert generate_derived_password("john.doe@example.com", "John Doe") == "john_john"

    def test_spaces_removed_from_name(self) -> None:
        """Spaces are removed before truncation."""
        assert generate_derived_password("x@acme.com", "Al Bo") == "x_albo"

    def test_short_parts_not_padded(self) -> None:
        """Short parts are used as-is."""
        assert generate_derived_password("ab@acme.com", "Li") == "ab_li"

    def test_lowercased(self) -> None:
        """Both parts are lowercased."""
        assert generate_derived_password("ALICE@techstart.io", "ALICE Johnson") == "alic_alic"

    def test_deterministic(self) -> None:
        """Same input always gives the same password."""
        first = generate_derived_password("jane.doe@acme.com", "Jane Doe")
        assert first == generate_derived_password("jane.doe@acme.com", "Jane Doe")
