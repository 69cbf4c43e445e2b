"""User service enforcing tenant isolation on every read and write."""

from __future__ import annotations

import structlog

from tenantkit.core.auth.password import PasswordHasher, generate_derived_password
from tenantkit.core.errors import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    ValidationError,
)
from tenantkit.core.identity import CallerContext
from tenantkit.core.repositories import OrganizationRepository, UserRepository
from tenantkit.core.types import Page, User, UserStatus, UserType, clamp_page
from tenantkit.core.users.types import UserCreate, UserUpdate

logger = structlog.get_logger()

ASSIGNABLE_USER_TYPES = (UserType.ORG_USER.value, UserType.ORG_ADMIN.value)
USER_STATUSES = tuple(s.value for s in UserStatus)
MIN_PASSWORD_LENGTH = 6


def _validate_user_type(user_type: str) -> str:
    value = (user_type or "").strip().lower()
    if value not in ASSIGNABLE_USER_TYPES:
        raise ValidationError(
            f"Invalid user type. Valid values are: {', '.join(ASSIGNABLE_USER_TYPES)}"
        )
    return value


def _validate_status(status: str) -> str:
    value = (status or "").strip().lower()
    if value not in USER_STATUSES:
        raise ValidationError(f"Invalid status. Valid values are: {', '.join(USER_STATUSES)}")
    return value


class UserService:
    """Service for user management operations.

    Non-platform callers only ever see and touch users of their own
    organization. A user from another tenant is reported as forbidden,
    not as missing.
    """

    def __init__(
        self,
        users: UserRepository,
        organizations: OrganizationRepository,
        hasher: PasswordHasher,
    ) -> None:
        """Initialize with repositories and the password hasher.

        Args:
            users: User repository.
            organizations: Organization repository, used to resolve target tenants.
            hasher: Password hasher for derived and changed credentials.
        """
        self._users = users
        self._organizations = organizations
        self._hasher = hasher

    async def _load_scoped(self, caller: CallerContext, user_id: str, action: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        if not caller.can_access_org(user.org_id):
            logger.warning(
                "cross_tenant_access_denied",
                caller_id=caller.user_id,
                caller_org_id=caller.org_id,
                target_user_id=user_id,
                action=action,
            )
            if action == "reset":
                raise ForbiddenError("You can only reset passwords for users in your organization")
            raise ForbiddenError(f"You can only {action} users from your organization")
        return user

    async def get_user(self, caller: CallerContext, user_id: str) -> User:
        """Get a single user.

        Raises:
            NotFoundError: If the user does not exist.
            ForbiddenError: If the user belongs to another tenant.
        """
        return await self._load_scoped(caller, user_id, "view")

    async def list_users(
        self,
        caller: CallerContext,
        page: int = 1,
        page_size: int = 20,
        org_id: str | None = None,
    ) -> Page[User]:
        """List users visible to the caller.

        Platform admins get every tenant unless ``org_id`` narrows the
        listing. Everyone else is pinned to their own organization and
        ``org_id`` is ignored.

        Args:
            caller: Requesting identity.
            page: 1-based page number.
            page_size: Items per page, clamped to [1, 100].
            org_id: Optional tenant filter for platform admins.

        Returns:
            The requested page of users.
        """
        page, page_size = clamp_page(page, page_size)

        if caller.is_platform_admin and not org_id:
            items = await self._users.list(page, page_size)
            total = await self._users.count()
        else:
            scope = org_id if caller.is_platform_admin else caller.org_id
            items = await self._users.list_by_org(scope, page, page_size)
            total = await self._users.count_by_org(scope)

        return Page[User](items=items, total_count=total, page=page, page_size=page_size)

    async def _resolve_target_org(
        self, caller: CallerContext, org_id: str | None
    ) -> tuple[str, str]:
        if caller.is_platform_admin:
            if not org_id:
                raise ValidationError("An organization id is required to create a user")
            organization = await self._organizations.get_by_id(org_id)
            if organization is None:
                raise NotFoundError("Organization", org_id)
            return organization.id, organization.name

        if org_id and org_id != caller.org_id:
            raise ForbiddenError("You can only create users in your organization")
        return caller.org_id, caller.org_name

    async def create_user(
        self,
        caller: CallerContext,
        request: UserCreate,
        org_id: str | None = None,
    ) -> User:
        """Create a user with a derived initial password.

        The initial password follows the documented derivation from email
        and name. It is hashed before storage and never returned.

        Args:
            caller: Requesting identity.
            request: New user fields.
            org_id: Target tenant. Required for platform admins, optional
                for everyone else and must match their own organization.

        Returns:
            The stored user.

        Raises:
            ValidationError: If the user type is not assignable.
            ForbiddenError: If a tenant admin targets another organization.
            NotFoundError: If a platform admin targets a missing organization.
            ConflictError: If the email is already in use.
        """
        user_type = _validate_user_type(request.user_type)
        target_org_id, target_org_name = await self._resolve_target_org(caller, org_id)

        email = request.email.strip()
        if await self._users.exists_by_email(email):
            raise ConflictError(f"A user with email '{email}' already exists")

        password = generate_derived_password(email, request.name)
        user = User(
            org_id=target_org_id,
            org_name=target_org_name,
            user_type=user_type,
            role=(request.role or user_type).strip().lower(),
            status=UserStatus.ACTIVE,
            name=request.name.strip(),
            email=email,
            password_hash=self._hasher.hash_password(password),
            created_by=caller.user_id,
            modified_by=caller.user_id,
        )

        created = await self._users.create(user)
        logger.info(
            "user_created",
            user_id=created.id,
            org_id=created.org_id,
            user_type=created.user_type,
            created_by=caller.user_id,
        )
        return created

    async def update_user(self, caller: CallerContext, user_id: str, request: UserUpdate) -> User:
        """Apply a partial update to a user.

        Raises:
            NotFoundError: If the user does not exist.
            ForbiddenError: If the user belongs to another tenant.
            ValidationError: If status or user type is not allowed.
            ConflictError: If the new email is already in use.
        """
        user = await self._load_scoped(caller, user_id, "update")

        if request.status is not None:
            user.status = _validate_status(request.status)

        if request.user_type is not None:
            user.user_type = _validate_user_type(request.user_type)

        if request.name is not None:
            user.name = request.name.strip()

        if request.email is not None:
            email = request.email.strip()
            if email.lower() != user.email.lower():
                if await self._users.exists_by_email(email, exclude_id=user.id):
                    raise ConflictError(f"A user with email '{email}' already exists")
            user.email = email

        if request.role is not None:
            user.role = request.role.strip().lower()

        user.modified_by = caller.user_id
        updated = await self._users.update(user)
        if updated is None:
            raise NotFoundError("User", user_id)

        logger.info("user_updated", user_id=user_id, modified_by=caller.user_id)
        return updated

    async def delete_user(self, caller: CallerContext, user_id: str) -> None:
        """Soft delete a user. Platform admins can never be deleted here.

        Raises:
            NotFoundError: If the user does not exist.
            ForbiddenError: If the user belongs to another tenant or is a platform admin.
        """
        user = await self._load_scoped(caller, user_id, "delete")

        if user.user_type == UserType.PLATFORM_ADMIN:
            logger.warning(
                "platform_admin_delete_denied", user_id=user_id, caller_id=caller.user_id
            )
            raise ForbiddenError("Cannot delete platform admin user")

        if not await self._users.soft_delete(user_id, caller.user_id):
            raise NotFoundError("User", user_id)

        logger.info("user_deleted", user_id=user_id, deleted_by=caller.user_id)

    async def change_password(
        self,
        caller: CallerContext,
        current_password: str,
        new_password: str,
    ) -> None:
        """Replace the caller's own password after proving the current one.

        Raises:
            NotFoundError: If the caller's account no longer exists.
            UnauthorizedError: If the current password does not verify.
            ValidationError: If the new password is too short.
        """
        user = await self._users.get_by_id(caller.user_id)
        if user is None:
            raise NotFoundError("User", caller.user_id)

        if not self._hasher.verify_password(current_password, user.password_hash):
            logger.warning("password_change_rejected", user_id=caller.user_id)
            raise UnauthorizedError("Current password is incorrect")

        if not new_password or len(new_password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"New password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        user.password_hash = self._hasher.hash_password(new_password)
        user.modified_by = caller.user_id
        if await self._users.update(user) is None:
            raise NotFoundError("User", caller.user_id)

        logger.info("password_changed", user_id=caller.user_id)

    async def reset_password(self, caller: CallerContext, user_id: str) -> None:
        """Reset a user's password to the derived initial password.

        The new plaintext is never returned. Users learn it from the
        documented derivation and are expected to change it.

        Raises:
            NotFoundError: If the user does not exist.
            ForbiddenError: If the user belongs to another tenant, or is a
                platform admin and the caller is not.
        """
        user = await self._load_scoped(caller, user_id, "reset")

        if user.user_type == UserType.PLATFORM_ADMIN and not caller.is_platform_admin:
            raise ForbiddenError("Only platform admins can reset platform admin passwords")

        password = generate_derived_password(user.email, user.name)
        user.password_hash = self._hasher.hash_password(password)
        user.modified_by = caller.user_id
        if await self._users.update(user) is None:
            raise NotFoundError("User", user_id)

        logger.info("password_reset", user_id=user_id, reset_by=caller.user_id)
