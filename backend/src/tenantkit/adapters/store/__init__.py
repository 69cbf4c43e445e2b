"""Entity store implementations."""

from tenantkit.adapters.store.memory import (
    InMemoryOrganizationRepository,
    InMemoryStore,
    InMemoryUserRepository,
)

__all__ = [
    "InMemoryOrganizationRepository",
    "InMemoryStore",
    "InMemoryUserRepository",
]
