"""Search backend protocol.

Backends only ever receive queries that have already been sanitized.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from tenantkit.core.search.types import SearchFilters
from tenantkit.core.types import SearchableItem


@runtime_checkable
class SearchRepository(Protocol):
    """A ranked content index with facet counting."""

    async def search(
        self,
        query: str,
        page_number: int = 1,
        page_size: int = 10,
        category: str | None = None,
        type: str | None = None,
        filters: SearchFilters | None = None,
    ) -> tuple[list[SearchableItem], int]:
        """Return one page of ranked items and the total number of matches."""
        ...

    async def facet_counts(
        self,
        query: str,
        filters: SearchFilters | None = None,
    ) -> dict[str, int]:
        """Count matching items grouped by ``"{field}:{value}"``."""
        ...
