"""Organization service.

Callers are guaranteed to be platform admins before reaching this
service; the HTTP layer enforces that. The caller context is still taken
so audit fields record who acted.
"""

from __future__ import annotations

import structlog

from tenantkit.core.errors import ConflictError, NotFoundError, ValidationError
from tenantkit.core.identity import CallerContext
from tenantkit.core.organizations.types import (
    OrganizationCreate,
    OrganizationUpdate,
    PhoneInput,
)
from tenantkit.core.repositories import OrganizationRepository
from tenantkit.core.types import (
    DEFAULT_USER_LIMIT,
    Contact,
    Limits,
    Organization,
    OrganizationStatus,
    Page,
    Phone,
    Subscription,
    clamp_page,
)

logger = structlog.get_logger()

ORGANIZATION_STATUSES = tuple(s.value for s in OrganizationStatus)


def build_phone(phone: PhoneInput) -> Phone:
    """Build a stored phone number, deriving its E.164 form."""
    country_code = phone.country_code.strip()
    number = phone.number.strip()
    return Phone(country_code=country_code, number=number, e164=f"{country_code}{number}")


class OrganizationService:
    """Service for organization management operations."""

    def __init__(self, organizations: OrganizationRepository) -> None:
        """Initialize with the organization repository.

        Args:
            organizations: Organization repository.
        """
        self._organizations = organizations

    async def get_organization(self, caller: CallerContext, org_id: str) -> Organization:
        """Get a single organization.

        Raises:
            NotFoundError: If the organization does not exist.
        """
        organization = await self._organizations.get_by_id(org_id)
        if organization is None:
            raise NotFoundError("Organization", org_id)
        return organization

    async def list_organizations(
        self,
        caller: CallerContext,
        page: int = 1,
        page_size: int = 20,
    ) -> Page[Organization]:
        """List organizations, newest first."""
        page, page_size = clamp_page(page, page_size)
        items = await self._organizations.list(page, page_size)
        total = await self._organizations.count()
        return Page[Organization](items=items, total_count=total, page=page, page_size=page_size)

    async def create_organization(
        self,
        caller: CallerContext,
        request: OrganizationCreate,
    ) -> Organization:
        """Create an organization.

        Args:
            caller: Requesting platform admin.
            request: New organization fields.

        Returns:
            The stored organization.

        Raises:
            ConflictError: If the name is already in use.
        """
        name = request.name.strip()
        if await self._organizations.exists_by_name(name):
            raise ConflictError(f"An organization with name '{name}' already exists")

        contact = Contact(email=request.contact.email.strip())
        if request.contact.phone is not None:
            contact.phone = build_phone(request.contact.phone)
        if request.contact.address is not None:
            contact.address = request.contact.address

        organization = Organization(
            name=name,
            status=OrganizationStatus.ACTIVE,
            contact=contact,
            subscription=Subscription(
                limits=Limits(user_limit=request.user_limit or DEFAULT_USER_LIMIT)
            ),
            created_by=caller.user_id,
            modified_by=caller.user_id,
        )

        created = await self._organizations.create(organization)
        logger.info("organization_created", org_id=created.id, created_by=caller.user_id)
        return created

    async def update_organization(
        self,
        caller: CallerContext,
        org_id: str,
        request: OrganizationUpdate,
    ) -> Organization:
        """Apply a partial update to an organization.

        Raises:
            NotFoundError: If the organization does not exist.
            ValidationError: If the status is not allowed.
            ConflictError: If the new name is already in use.
        """
        organization = await self.get_organization(caller, org_id)

        if request.status is not None:
            status = request.status.strip().lower()
            if status not in ORGANIZATION_STATUSES:
                raise ValidationError(
                    f"Invalid status. Valid values are: {', '.join(ORGANIZATION_STATUSES)}"
                )
            organization.status = status

        if request.name is not None:
            name = request.name.strip()
            if name.lower() != organization.name.lower():
                if await self._organizations.exists_by_name(name, exclude_id=organization.id):
                    raise ConflictError(f"An organization with name '{name}' already exists")
            organization.name = name

        if request.contact is not None:
            if request.contact.email is not None:
                organization.contact.email = request.contact.email.strip()
            if request.contact.phone is not None:
                organization.contact.phone = build_phone(request.contact.phone)
            if request.contact.address is not None:
                organization.contact.address = request.contact.address

        if request.user_limit is not None:
            organization.subscription.limits.user_limit = request.user_limit

        organization.modified_by = caller.user_id
        updated = await self._organizations.update(organization)
        if updated is None:
            raise NotFoundError("Organization", org_id)

        logger.info("organization_updated", org_id=org_id, modified_by=caller.user_id)
        return updated

    async def delete_organization(self, caller: CallerContext, org_id: str) -> None:
        """Soft delete an organization.

        Raises:
            NotFoundError: If the organization does not exist.
        """
        await self.get_organization(caller, org_id)
        if not await self._organizations.soft_delete(org_id, caller.user_id):
            raise NotFoundError("Organization", org_id)
        logger.info("organization_deleted", org_id=org_id, deleted_by=caller.user_id)
