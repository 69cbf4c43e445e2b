"""Domain types for tenants, users and searchable content.

Stored entities serialize with camelCase keys (``orgId``, ``isDeleted``)
so the same models round-trip through the document store and the API.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

T = TypeVar("T")

DEFAULT_USER_LIMIT = 5


def utc_now() -> datetime:
    return datetime.now(UTC)


class UserType(str, Enum):
    """Kinds of user account."""

    ORG_USER = "org_user"
    ORG_ADMIN = "org_admin"
    PLATFORM_ADMIN = "platform_admin"


class UserStatus(str, Enum):
    """User account states."""

    ACTIVE = "active"
    SUSPENDED = "suspended"


class OrganizationStatus(str, Enum):
    """Tenant subscription states."""

    ACTIVE = "active"
    SUSPENDED = "suspended"
    CANCELLED = "cancelled"


class DocumentModel(BaseModel):
    """Base for models persisted with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
    )


class Phone(DocumentModel):
    country_code: str = ""
    number: str = ""
    e164: str = ""


class Address(DocumentModel):
    line1: str = ""
    line2: str | None = None
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""


class Contact(DocumentModel):
    email: str = ""
    phone: Phone = Field(default_factory=Phone)
    address: Address = Field(default_factory=Address)


class Limits(DocumentModel):
    user_limit: int = DEFAULT_USER_LIMIT


class Subscription(DocumentModel):
    limits: Limits = Field(default_factory=Limits)


class AuditedEntity(DocumentModel):
    """Fields shared by every soft-deletable, versioned record."""

    id: str = ""
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime = Field(default_factory=utc_now)
    created_by: str | None = None
    modified_at: datetime = Field(default_factory=utc_now)
    modified_by: str | None = None
    version: int = 1


class User(AuditedEntity):
    """A login identity scoped to one organization.

    Platform admins carry the platform sentinel as ``org_id``.
    """

    org_id: str
    org_name: str = ""
    user_type: UserType = UserType.ORG_USER
    role: str = ""
    status: UserStatus = UserStatus.ACTIVE
    name: str
    email: str
    password_hash: str = ""


class Organization(AuditedEntity):
    """A tenant. ``org_id`` always mirrors ``id``."""

    org_id: str = ""
    name: str
    status: OrganizationStatus = OrganizationStatus.ACTIVE
    contact: Contact = Field(default_factory=Contact)
    subscription: Subscription = Field(default_factory=Subscription)


class SearchableItem(DocumentModel):
    """A piece of content exposed through search."""

    id: str
    title: str = ""
    description: str = ""
    content: str = ""
    type: str = ""
    category: str = ""
    url: str = ""
    image_url: str | None = None
    tags: list[str] = Field(default_factory=list)
    metadata: dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=utc_now)
    modified_at: datetime | None = None
    is_active: bool = True


class Page(DocumentModel, Generic[T]):
    """One page of a paginated listing."""

    items: list[T]
    total_count: int
    page: int
    page_size: int

    @computed_field(alias="hasMore")  # type: ignore[prop-decorator]
    @property
    def has_more(self) -> bool:
        return self.page * self.page_size < self.total_count


MAX_PAGE_SIZE = 100


def clamp_page(page: int, page_size: int) -> tuple[int, int]:
    """Force a page number to at least 1 and a page size into [1, MAX_PAGE_SIZE]."""
    return max(1, page), min(max(1, page_size), MAX_PAGE_SIZE)
