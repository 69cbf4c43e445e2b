"""Repository protocols for stored entities.

Shared contract for every implementation:

- Lookups, listings, counts and existence checks never see soft-deleted
  records.
- ``create`` assigns an id when none is set, stamps created/modified
  times and starts ``version`` at 1.
- ``update`` increments ``version`` by one over the stored value and
  refreshes ``modified_at``. It is not a compare-and-swap, so concurrent
  updates resolve as last write wins. Updating an id that is missing or
  soft-deleted returns None.
- ``soft_delete`` returns False for a missing record, otherwise marks it
  deleted, bumps its version and returns True.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenantkit.core.types import Organization, User


@runtime_checkable
class UserRepository(Protocol):
    """Storage for users, logically partitioned by organization."""

    async def get_by_id(self, user_id: str) -> User | None:
        """Resolve a user by id across every tenant."""
        ...

    async def get_by_email(self, email: str) -> User | None:
        """Find a user by email, case-insensitively."""
        ...

    async def list(self, page: int, page_size: int) -> list[User]:
        """List users across all tenants, newest first."""
        ...

    async def list_by_org(self, org_id: str, page: int, page_size: int) -> list[User]:
        """List one tenant's users, newest first."""
        ...

    async def count(self) -> int:
        """Count users across all tenants."""
        ...

    async def count_by_org(self, org_id: str) -> int:
        """Count one tenant's users."""
        ...

    async def create(self, user: User) -> User:
        """Persist a new user."""
        ...

    async def update(self, user: User) -> User | None:
        """Persist changes to an existing user."""
        ...

    async def soft_delete(self, user_id: str, deleted_by: str) -> bool:
        """Mark a user deleted."""
        ...

    async def exists_by_email(self, email: str, exclude_id: str | None = None) -> bool:
        """Check whether a live user already holds ``email``."""
        ...


@runtime_checkable
class OrganizationRepository(Protocol):
    """Storage for organizations, one partition per record."""

    async def get_by_id(self, org_id: str) -> Organization | None:
        """Resolve an organization by id."""
        ...

    async def list(self, page: int, page_size: int) -> list[Organization]:
        """List organizations, newest first."""
        ...

    async def count(self) -> int:
        """Count organizations."""
        ...

    async def create(self, organization: Organization) -> Organization:
        """Persist a new organization."""
        ...

    async def update(self, organization: Organization) -> Organization | None:
        """Persist changes to an existing organization."""
        ...

    async def soft_delete(self, org_id: str, deleted_by: str) -> bool:
        """Mark an organization deleted."""
        ...

    async def exists_by_name(self, name: str, exclude_id: str | None = None) -> bool:
        """Check whether a live organization already holds ``name``."""
        ...
