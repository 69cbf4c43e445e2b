"""In-memory repositories for demos and tests.

A single InMemoryStore instance is created by the application and handed
to both repositories. Records are copied on the way in and out, so
callers never hold a reference into the store. The store assumes one
writer at a time and does no locking.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tenantkit.adapters.store.ids import ORGANIZATION_ID_PREFIX, USER_ID_PREFIX, new_id
from tenantkit.core.types import Organization, User, utc_now


@dataclass
class InMemoryStore:
    """Process-owned record collections, in insertion order."""

    users: list[User] = field(default_factory=list)
    organizations: list[Organization] = field(default_factory=list)

    def clear(self) -> None:
        self.users.clear()
        self.organizations.clear()


def _page(records: list, page: int, page_size: int) -> list:
    ordered = sorted(records, key=lambda r: r.created_at, reverse=True)
    offset = (page - 1) * page_size
    return [r.model_copy(deep=True) for r in ordered[offset : offset + page_size]]


class InMemoryUserRepository:
    """User repository over an InMemoryStore."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _live(self) -> list[User]:
        return [u for u in self._store.users if not u.is_deleted]

    def _find(self, user_id: str) -> User | None:
        return next((u for u in self._live() if u.id == user_id), None)

    async def get_by_id(self, user_id: str) -> User | None:
        user = self._find(user_id)
        return user.model_copy(deep=True) if user else None

    async def get_by_email(self, email: str) -> User | None:
        needle = email.strip().lower()
        user = next((u for u in self._live() if u.email.lower() == needle), None)
        return user.model_copy(deep=True) if user else None

    async def list(self, page: int, page_size: int) -> list[User]:
        return _page(self._live(), page, page_size)

    async def list_by_org(self, org_id: str, page: int, page_size: int) -> list[User]:
        return _page([u for u in self._live() if u.org_id == org_id], page, page_size)

    async def count(self) -> int:
        return len(self._live())

    async def count_by_org(self, org_id: str) -> int:
        return sum(1 for u in self._live() if u.org_id == org_id)

    async def create(self, user: User) -> User:
        stored = user.model_copy(deep=True)
        now = utc_now()
        stored.id = stored.id or new_id(USER_ID_PREFIX)
        stored.created_at = now
        stored.modified_at = now
        stored.version = 1
        stored.is_deleted = False
        stored.deleted_at = None
        self._store.users.append(stored)
        return stored.model_copy(deep=True)

    async def update(self, user: User) -> User | None:
        for index, current in enumerate(self._store.users):
            if current.id != user.id or current.is_deleted:
                continue
            stored = user.model_copy(deep=True)
            stored.created_at = current.created_at
            stored.created_by = current.created_by
            stored.is_deleted = False
            stored.deleted_at = None
            stored.version = current.version + 1
            stored.modified_at = utc_now()
            self._store.users[index] = stored
            return stored.model_copy(deep=True)
        return None

    async def soft_delete(self, user_id: str, deleted_by: str) -> bool:
        user = self._find(user_id)
        if user is None:
            return False
        now = utc_now()
        user.is_deleted = True
        user.deleted_at = now
        user.modified_at = now
        user.modified_by = deleted_by
        user.version += 1
        return True

    async def exists_by_email(self, email: str, exclude_id: str | None = None) -> bool:
        needle = email.strip().lower()
        return any(
            u.email.lower() == needle and u.id != exclude_id for u in self._live()
        )


class InMemoryOrganizationRepository:
    """Organization repository over an InMemoryStore."""

    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def _live(self) -> list[Organization]:
        return [o for o in self._store.organizations if not o.is_deleted]

    def _find(self, org_id: str) -> Organization | None:
        return next((o for o in self._live() if o.id == org_id), None)

    async def get_by_id(self, org_id: str) -> Organization | None:
        organization = self._find(org_id)
        return organization.model_copy(deep=True) if organization else None

    async def list(self, page: int, page_size: int) -> list[Organization]:
        return _page(self._live(), page, page_size)

    async def count(self) -> int:
        return len(self._live())

    async def create(self, organization: Organization) -> Organization:
        stored = organization.model_copy(deep=True)
        now = utc_now()
        stored.id = stored.id or new_id(ORGANIZATION_ID_PREFIX)
        stored.org_id = stored.id
        stored.created_at = now
        stored.modified_at = now
        stored.version = 1
        stored.is_deleted = False
        stored.deleted_at = None
        self._store.organizations.append(stored)
        return stored.model_copy(deep=True)

    async def update(self, organization: Organization) -> Organization | None:
        for index, current in enumerate(self._store.organizations):
            if current.id != organization.id or current.is_deleted:
                continue
            stored = organization.model_copy(deep=True)
            stored.org_id = current.id
            stored.created_at = current.created_at
            stored.created_by = current.created_by
            stored.is_deleted = False
            stored.deleted_at = None
            stored.version = current.version + 1
            stored.modified_at = utc_now()
            self._store.organizations[index] = stored
            return stored.model_copy(deep=True)
        return None

    async def soft_delete(self, org_id: str, deleted_by: str) -> bool:
        organization = self._find(org_id)
        if organization is None:
            return False
        now = utc_now()
        organization.is_deleted = True
        organization.deleted_at = now
        organization.modified_at = now
        organization.modified_by = deleted_by
        organization.version += 1
        return True

    async def exists_by_name(self, name: str, exclude_id: str | None = None) -> bool:
        needle = name.strip().lower()
        return any(
            o.name.lower() == needle and o.id != exclude_id for o in self._live()
        )
