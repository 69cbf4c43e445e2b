"""Explicit caller identity passed into every service call."""

from __future__ import annotations

from dataclasses import dataclass

from tenantkit.config import PLATFORM_ORG_ID
from tenantkit.core.types import UserType


@dataclass(frozen=True)
class CallerContext:
    """Who is making the request, taken from verified token claims."""

    user_id: str
    org_id: str
    user_type: str
    role: str = ""
    org_name: str = ""
    email: str = ""

    @property
    def is_platform_admin(self) -> bool:
        return self.user_type == UserType.PLATFORM_ADMIN

    @property
    def is_org_admin(self) -> bool:
        return self.user_type == UserType.ORG_ADMIN

    def can_access_org(self, org_id: str) -> bool:
        """Whether the caller may act on records belonging to ``org_id``."""
        return self.is_platform_admin or self.org_id == org_id


def is_platform_scope(org_id: str, user_type: str) -> bool:
    """Whether a user sits outside any tenant."""
    return org_id == PLATFORM_ORG_ID or user_type == UserType.PLATFORM_ADMIN
