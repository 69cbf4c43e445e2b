"""Tests for access token issue and validation."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from tenantkit.config import JwtSettings
from tenantkit.core.auth.jwt import TokenError, TokenService


def _issue(service: TokenService) -> str:
    return service.create_token(
        user_id="usr_ACME001",
        email="john.smith@acme.com",
        role="org_admin",
        org_id="org_01HABC",
        org_name="Acme Corp",
        user_type="org_admin",
    ).token


class TestCreateToken:
    """Test token creation."""

    def test_round_trip_claims(self, token_service: TokenService) -> None:
        """Decoded claims carry the identity that was issued."""
        claims = token_service.decode_token(_issue(token_service))

        assert claims.sub == "usr_ACME001"
        assert claims.email == "john.smith@acme.com"
        assert claims.unique_name == "john.smith@acme.com"
        assert claims.role == "org_admin"
        assert claims.org_id == "org_01HABC"
        assert claims.org_name == "Acme Corp"
        assert claims.user_type == "org_admin"
        assert claims.iss == "tenantkit-test"
        assert claims.exp - claims.iat == 3600

    def test_expires_in_seconds(self, token_service: TokenService) -> None:
        """Lifetime is reported in seconds."""
        issued = token_service.create_token("u", "e@x.com", "r", "o", "n", "org_user")
        assert issued.expires_in == 3600

    def test_unique_token_ids(self, token_service: TokenService) -> None:
        """Every token gets a fresh jti."""
        first = token_service.decode_token(_issue(token_service))
        second = token_service.decode_token(_issue(token_service))
        assert first.jti != second.jti


class TestDecodeToken:
    """Test token validation."""

    def test_wrong_secret_rejected(self, token_service: TokenService) -> None:
        """Signature is checked."""
        other = TokenService(
            JwtSettings(
                secret_key="another-secret-key-with-enough-length-xx",
                issuer="tenantkit-test",
                audience="tenantkit-test-api",
            )
        )
        with pytest.raises(TokenError):
            other.decode_token(_issue(token_service))

    def test_wrong_issuer_rejected(self, jwt_settings: JwtSettings) -> None:
        """Issuer is checked."""
        issuer = TokenService(jwt_settings)
        verifier = TokenService(
            JwtSettings(
                secret_key=jwt_settings.secret_key,
                issuer="someone-else",
                audience=jwt_settings.audience,
            )
        )
        with pytest.raises(TokenError):
            verifier.decode_token(_issue(issuer))

    def test_wrong_audience_rejected(self, jwt_settings: JwtSettings) -> None:
        """Audience is checked."""
        issuer = TokenService(jwt_settings)
        verifier = TokenService(
            JwtSettings(
                secret_key=jwt_settings.secret_key,
                issuer=jwt_settings.issuer,
                audience="another-api",
            )
        )
        with pytest.raises(TokenError):
            verifier.decode_token(_issue(issuer))

    def test_expired_rejected_without_skew(
        self, token_service: TokenService, jwt_settings: JwtSettings
    ) -> None:
        """A token one second past expiry is rejected."""
        now = datetime.now(UTC)
        payload = {
            "sub": "usr_1",
            "organisation_id": "org_1",
            "user_type": "org_user",
            "iss": jwt_settings.issuer,
            "aud": jwt_settings.audience,
            "iat": int((now - timedelta(minutes=10)).timestamp()),
            "exp": int((now - timedelta(seconds=1)).timestamp()),
        }
        token = jwt.encode(payload, jwt_settings.secret_key, algorithm="HS256")

        with pytest.raises(TokenError, match="expired"):
            token_service.decode_token(token)

    def test_garbage_rejected(self, token_service: TokenService) -> None:
        """Non-JWT input is rejected."""
        with pytest.raises(TokenError):
            token_service.decode_token("not.a.token")

    def test_validate_token(self, token_service: TokenService) -> None:
        """Boolean validation mirrors decode."""
        assert token_service.validate_token(_issue(token_service)) is True
        assert token_service.validate_token("garbage") is False
