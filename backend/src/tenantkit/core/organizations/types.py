"""Commands accepted by the organization service."""

from __future__ import annotations

from pydantic import Field

from tenantkit.core.types import Address, DocumentModel


class PhoneInput(DocumentModel):
    country_code: str = Field(..., min_length=1, max_length=5)
    number: str = Field(..., min_length=4, max_length=20)


class ContactInput(DocumentModel):
    email: str = ""
    phone: PhoneInput | None = None
    address: Address | None = None


class ContactUpdate(DocumentModel):
    """Contact changes. Unset parts are left alone."""

    email: str | None = None
    phone: PhoneInput | None = None
    address: Address | None = None


class OrganizationCreate(DocumentModel):
    name: str = Field(..., min_length=1, max_length=200)
    contact: ContactInput = Field(default_factory=ContactInput)
    user_limit: int | None = Field(None, ge=1)


class OrganizationUpdate(DocumentModel):
    """Partial update for an organization. Unset fields are left alone."""

    name: str | None = Field(None, min_length=1, max_length=200)
    status: str | None = None
    contact: ContactUpdate | None = None
    user_limit: int | None = Field(None, ge=1)
