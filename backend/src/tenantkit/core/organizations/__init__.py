"""Tenant management for platform administrators."""

from tenantkit.core.organizations.service import OrganizationService
from tenantkit.core.organizations.types import (
    ContactInput,
    ContactUpdate,
    OrganizationCreate,
    OrganizationUpdate,
    PhoneInput,
)

__all__ = [
    "ContactInput",
    "ContactUpdate",
    "OrganizationCreate",
    "OrganizationService",
    "OrganizationUpdate",
    "PhoneInput",
]
