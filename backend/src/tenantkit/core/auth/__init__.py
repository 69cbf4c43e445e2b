"""Authentication: credential hashing, tokens and login."""

from tenantkit.core.auth.jwt import IssuedToken, TokenClaims, TokenError, TokenService
from tenantkit.core.auth.password import PasswordHasher, generate_derived_password
from tenantkit.core.auth.service import AuthService, LoginResult

__all__ = [
    "AuthService",
    "IssuedToken",
    "LoginResult",
    "PasswordHasher",
    "TokenClaims",
    "TokenError",
    "TokenService",
    "generate_derived_password",
]
