"""Auth service for login and credential checks."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from tenantkit.core.auth.jwt import TokenService
from tenantkit.core.auth.password import PasswordHasher
from tenantkit.core.errors import UnauthorizedError
from tenantkit.core.identity import is_platform_scope
from tenantkit.core.repositories import OrganizationRepository, UserRepository
from tenantkit.core.types import OrganizationStatus, User, UserStatus

logger = structlog.get_logger()

INVALID_CREDENTIALS = "Invalid username or password"
ACCOUNT_DISABLED = "User account is disabled"
ORGANIZATION_REMOVED = "Your organization account has been removed"
ORGANIZATION_SUSPENDED = "Your organisation subscription is suspended. Please contact support."
ORGANIZATION_CANCELLED = (
    "Your organisation subscription has been cancelled. Please contact support."
)


@dataclass(frozen=True)
class LoginResult:
    """Outcome of a successful login."""

    token: str
    expires_in: int
    user: User
    token_type: str = "Bearer"


class AuthService:
    """Service for authentication operations."""

    def __init__(
        self,
        users: UserRepository,
        organizations: OrganizationRepository,
        hasher: PasswordHasher,
        tokens: TokenService,
    ) -> None:
        """Initialize with repositories and credential helpers.

        Args:
            users: User repository.
            organizations: Organization repository.
            hasher: Password hasher for credential checks.
            tokens: Token service for issuing access tokens.
        """
        self._users = users
        self._organizations = organizations
        self._hasher = hasher
        self._tokens = tokens

    async def login(self, email: str, password: str) -> LoginResult:
        """Authenticate a user and issue an access token.

        An unknown email and a wrong password fail with the same message.
        Platform admins skip the organization checks.

        Args:
            email: User's email address.
            password: Plain text password.

        Returns:
            Signed token, its lifetime and the authenticated user.

        Raises:
            UnauthorizedError: If authentication fails.
        """
        user = await self._users.get_by_email(email)
        if user is None:
            logger.warning("login_failed", reason="unknown_user")
            raise UnauthorizedError(INVALID_CREDENTIALS)

        if user.status != UserStatus.ACTIVE:
            logger.warning("login_failed", reason="user_inactive", user_id=user.id)
            raise UnauthorizedError(ACCOUNT_DISABLED)

        if not is_platform_scope(user.org_id, user.user_type):
            await self._check_organization(user)

        if not self._hasher.verify_password(password, user.password_hash):
            logger.warning("login_failed", reason="bad_password", user_id=user.id)
            raise UnauthorizedError(INVALID_CREDENTIALS)

        issued = self._tokens.create_token(
            user_id=user.id,
            email=user.email,
            role=user.role,
            org_id=user.org_id,
            org_name=user.org_name,
            user_type=user.user_type,
        )

        logger.info("user_logged_in", user_id=user.id, org_id=user.org_id)
        return LoginResult(token=issued.token, expires_in=issued.expires_in, user=user)

    async def validate_user(self, email: str, password: str) -> bool:
        """Check credentials without issuing a token.

        Args:
            email: User's email address.
            password: Plain text password.

        Returns:
            True if the user could log in with these credentials.
        """
        user = await self._users.get_by_email(email)
        if user is None or user.status != UserStatus.ACTIVE:
            return False

        if not is_platform_scope(user.org_id, user.user_type):
            organization = await self._organizations.get_by_id(user.org_id)
            if organization is None or organization.status != OrganizationStatus.ACTIVE:
                return False

        return self._hasher.verify_password(password, user.password_hash)

    async def _check_organization(self, user: User) -> None:
        organization = await self._organizations.get_by_id(user.org_id)
        if organization is None:
            logger.warning("login_failed", reason="org_missing", org_id=user.org_id)
            raise UnauthorizedError(ORGANIZATION_REMOVED)

        if organization.status == OrganizationStatus.SUSPENDED:
            logger.warning("login_failed", reason="org_suspended", org_id=user.org_id)
            raise UnauthorizedError(ORGANIZATION_SUSPENDED)

        if organization.status == OrganizationStatus.CANCELLED:
            logger.warning("login_failed", reason="org_cancelled", org_id=user.org_id)
            raise UnauthorizedError(ORGANIZATION_CANCELLED)
