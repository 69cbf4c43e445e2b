"""Response envelope and shared response models."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Generic, TypeVar

from fastapi import Request
from pydantic import Field

from tenantkit.core.types import Contact, DocumentModel, Organization, Page, Subscription, User

T = TypeVar("T")


def correlation_id(request: Request) -> str | None:
    return getattr(request.state, "correlation_id", None)


class ApiResponse(DocumentModel, Generic[T]):
    """Standard success envelope."""

    success: bool = True
    message: str | None = None
    data: T | None = None
    correlation_id: str | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


def ok(request: Request, data: T, message: str | None = None) -> ApiResponse[T]:
    """Wrap ``data`` in a success envelope."""
    return ApiResponse(data=data, message=message, correlation_id=correlation_id(request))


class UserResponse(DocumentModel):
    """A user as returned by the API. Credentials are never included."""

    id: str
    org_id: str
    org_name: str
    user_type: str
    role: str
    status: str
    name: str
    email: str
    created_at: datetime
    created_by: str | None = None
    modified_at: datetime
    modified_by: str | None = None
    version: int

    @classmethod
    def from_user(cls, user: User) -> UserResponse:
        return cls.model_validate(user.model_dump(exclude={"password_hash"}))


class OrganizationResponse(DocumentModel):
    id: str
    org_id: str
    name: str
    status: str
    contact: Contact
    subscription: Subscription
    created_at: datetime
    created_by: str | None = None
    modified_at: datetime
    modified_by: str | None = None
    version: int

    @classmethod
    def from_organization(cls, organization: Organization) -> OrganizationResponse:
        return cls.model_validate(organization.model_dump())


class PageResponse(DocumentModel, Generic[T]):
    items: list[T]
    total_count: int
    page: int
    page_size: int
    has_more: bool

    @classmethod
    def build(cls, items: list[T], page: Page) -> PageResponse[T]:
        return cls(
            items=items,
            total_count=page.total_count,
            page=page.page,
            page_size=page.page_size,
            has_more=page.has_more,
        )
