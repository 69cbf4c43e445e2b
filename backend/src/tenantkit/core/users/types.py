"""Commands accepted by the user service."""

from __future__ import annotations

from pydantic import Field

from tenantkit.core.types import DocumentModel


class UserCreate(DocumentModel):
    """Fields for a new user. The password is always derived, never supplied."""

    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., min_length=3, max_length=320)
    user_type: str
    role: str | None = None


class UserUpdate(DocumentModel):
    """Partial update for an existing user. Unset fields are left alone."""

    name: str | None = Field(None, min_length=1, max_length=200)
    email: str | None = Field(None, min_length=3, max_length=320)
    status: str | None = None
    user_type: str | None = None
    role: str | None = None
