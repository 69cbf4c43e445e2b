"""Password hashing using PBKDF2-HMAC-SHA256.

Stored hashes have the form ``"{iterations}.{base64 salt}.{base64 hash}"``.
The iteration count travels with the hash, so changing the configured
default never invalidates existing credentials.
"""

from __future__ import annotations

import base64
import binascii
import os

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.constant_time import bytes_eq
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from tenantkit.config import PasswordSettings

DERIVED_PART_LENGTH = 4


class PasswordHasher:
    """Hashes and verifies credentials with a server-side secret."""

    def __init__(self, settings: PasswordSettings | None = None) -> None:
        """Initialize with password settings.

        Args:
            settings: Hashing parameters. Loaded from the environment if omitted.
        """
        self._settings = settings or PasswordSettings()

    def _derive(self, password: str, salt: bytes, iterations: int, length: int) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=length,
            salt=salt,
            iterations=iterations,
        )
        return kdf.derive((password + self._settings.secret_key).encode("utf-8"))

    def hash_password(self, password: str) -> str:
        """Hash a password with a fresh random salt.

        Args:
            password: Plain text password.

        Returns:
            Encoded hash string.

        Raises:
            ValueError: If the password is empty.
        """
        if not password:
            raise ValueError("Password cannot be empty")

        iterations = self._settings.iterations
        salt = os.urandom(self._settings.salt_size)
        digest = self._derive(password, salt, iterations, self._settings.hash_size)
        return ".".join(
            (
                str(iterations),
                base64.b64encode(salt).decode("ascii"),
                base64.b64encode(digest).decode("ascii"),
            )
        )

    def verify_password(self, password: str, stored_hash: str) -> bool:
        """Verify a password against a stored hash.

        Never raises: empty input, a malformed hash or a failing key
        derivation all count as a mismatch.

        Args:
            password: Plain text password to check.
            stored_hash: Encoded hash to check against.

        Returns:
            True if the password matches.
        """
        if not password or not stored_hash:
            return False

        parts = stored_hash.split(".")
        if len(parts) != 3:
            return False

        try:
            iterations = int(parts[0])
            salt = base64.b64decode(parts[1], validate=True)
            expected = base64.b64decode(parts[2], validate=True)
            if iterations <= 0 or not expected:
                return False
            actual = self._derive(password, salt, iterations, len(expected))
        except (ValueError, TypeError, binascii.Error, OverflowError):
            return False

        return bytes_eq(actual, expected)


def generate_derived_password(email: str, name: str) -> str:
    """Build the initial password for a new or reset account.

    The result is the first four characters of the lowercased email local
    part and the first four of the lowercased name with spaces removed,
    joined by an underscore: ``john.doe@example.com`` and ``John Doe`` give
    ``john_john``.

    Args:
        email: Account email address.
        name: Account display name.

    Returns:
        Plain text password.
    """
    local_part = (email or "").split("@", 1)[0].lower()
    compact_name = (name or "").replace(" ", "").lower()
    return f"{local_part[:DERIVED_PART_LENGTH]}_{compact_name[:DERIVED_PART_LENGTH]}"
