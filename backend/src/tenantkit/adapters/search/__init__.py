"""Search backends."""

from tenantkit.adapters.search.memory import InMemorySearchRepository

__all__ = ["InMemorySearchRepository"]
