"""Search request and response shapes."""

from __future__ import annotations

import math
from datetime import datetime

from pydantic import Field

from tenantkit.core.types import DocumentModel

SearchFilters = dict[str, list[str]]


class SearchRequest(DocumentModel):
    """A search over the content index.

    Attributes:
        search_query: Raw query text as typed by the user.
        page_number: 1-based page number.
        page_size: Results per page.
        filters: Selected facet values keyed by index field name.
        category: Legacy single-value category filter.
        type: Legacy single-value type filter.
    """

    search_query: str = Field(..., min_length=1, max_length=500)
    page_number: int = Field(1, ge=1)
    page_size: int = Field(10, ge=1, le=100)
    filters: SearchFilters | None = None
    category: str | None = None
    type: str | None = None


class SearchResultItem(DocumentModel):
    id: str
    title: str = ""
    description: str = ""
    type: str = ""
    category: str = ""
    url: str = ""
    image_url: str | None = None
    highlight: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)
    relevance_score: float = 0.0
    created_at: datetime
    modified_at: datetime | None = None


class SearchResponse(DocumentModel):
    results: list[SearchResultItem] = Field(default_factory=list)
    total_results: int = 0
    page_number: int = 1
    page_size: int = 10
    total_pages: int = 0
    has_next_page: bool = False
    has_previous_page: bool = False
    search_query: str = ""
    sanitized_query: str = ""
    search_time_ms: int = 0
    facet_counts: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def create(
        cls,
        results: list[SearchResultItem],
        total_results: int,
        page_number: int,
        page_size: int,
        search_query: str,
        sanitized_query: str,
        search_time_ms: int,
        facet_counts: dict[str, int] | None = None,
    ) -> SearchResponse:
        """Build a response, deriving the paging flags from the totals."""
        total_pages = math.ceil(total_results / page_size) if page_size > 0 else 0
        return cls(
            results=results,
            total_results=total_results,
            page_number=page_number,
            page_size=page_size,
            total_pages=total_pages,
            has_next_page=page_number < total_pages,
            has_previous_page=page_number > 1,
            search_query=search_query,
            sanitized_query=sanitized_query,
            search_time_ms=search_time_ms,
            facet_counts=facet_counts or {},
        )
