"""User management scoped to the caller's tenant."""

from tenantkit.core.users.service import UserService
from tenantkit.core.users.types import UserCreate, UserUpdate

__all__ = ["UserCreate", "UserService", "UserUpdate"]
