"""JWT token creation and validation."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt

from tenantkit.config import JwtSettings


class TokenError(Exception):
    """Raised when token validation fails."""

    pass


@dataclass(frozen=True)
class TokenClaims:
    """Claims carried by an access token."""

    sub: str
    email: str
    unique_name: str
    jti: str
    role: str
    org_id: str
    org_name: str
    user_type: str
    iss: str
    iat: int
    exp: int


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed token and its lifetime."""

    token: str
    expires_in: int


class TokenService:
    """Issues and validates signed bearer tokens."""

    def __init__(self, settings: JwtSettings | None = None) -> None:
        """Initialize with JWT settings.

        Args:
            settings: Signing parameters. Loaded from the environment if omitted.
        """
        self._settings = settings or JwtSettings()

    @property
    def expiration_seconds(self) -> int:
        return self._settings.expiration_minutes * 60

    def create_token(
        self,
        user_id: str,
        email: str,
        role: str,
        org_id: str,
        org_name: str,
        user_type: str,
    ) -> IssuedToken:
        """Create a signed access token.

        Args:
            user_id: Subject identifier.
            email: User email, also used as the username claim.
            role: User role.
            org_id: Organization identifier (platform sentinel for platform admins).
            org_name: Organization display name.
            user_type: Kind of user account.

        Returns:
            Encoded token and its lifetime in seconds.
        """
        now = datetime.now(UTC)
        expire = now + timedelta(minutes=self._settings.expiration_minutes)

        payload = {
            "sub": user_id,
            "unique_name": email,
            "email": email,
            "jti": str(uuid4()),
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
            "role": role,
            "organisation_id": org_id,
            "organisation_name": org_name,
            "user_type": user_type,
            "iss": self._settings.issuer,
            "aud": self._settings.audience,
        }

        token = jwt.encode(payload, self._settings.secret_key, algorithm=self._settings.algorithm)
        return IssuedToken(token=token, expires_in=self.expiration_seconds)

    def decode_token(self, token: str) -> TokenClaims:
        """Decode and validate a token.

        Signature, issuer, audience and expiry are all checked with no
        clock skew allowance.

        Args:
            token: Encoded JWT string.

        Returns:
            Decoded token claims.

        Raises:
            TokenError: If the token is invalid or expired.
        """
        try:
            payload = jwt.decode(
                token,
                self._settings.secret_key,
                algorithms=[self._settings.algorithm],
                audience=self._settings.audience,
                issuer=self._settings.issuer,
                leeway=0,
                options={"require": ["exp", "iat", "sub", "iss", "aud"]},
            )
            return TokenClaims(
                sub=payload["sub"],
                email=payload.get("email", ""),
                unique_name=payload.get("unique_name", ""),
                jti=payload.get("jti", ""),
                role=payload.get("role", ""),
                org_id=payload["organisation_id"],
                org_name=payload.get("organisation_name", ""),
                user_type=payload["user_type"],
                iss=payload["iss"],
                iat=payload["iat"],
                exp=payload["exp"],
            )
        except jwt.ExpiredSignatureError:
            raise TokenError("Token has expired") from None
        except jwt.InvalidTokenError as e:
            raise TokenError(f"Invalid token: {e}") from None
        except KeyError as e:
            raise TokenError(f"Invalid token: missing claim {e}") from None

    def validate_token(self, token: str) -> bool:
        """Check whether a token is currently valid."""
        try:
            self.decode_token(token)
        except TokenError:
            return False
        return True
