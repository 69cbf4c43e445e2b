"""Search over indexed content, independent of the backing engine."""

from tenantkit.core.search.interfaces import SearchRepository
from tenantkit.core.search.sanitize import clean_filters, sanitize_query
from tenantkit.core.search.service import SearchService, display_score, generate_highlight
from tenantkit.core.search.types import (
    SearchFilters,
    SearchRequest,
    SearchResponse,
    SearchResultItem,
)

__all__ = [
    "SearchFilters",
    "SearchRepository",
    "SearchRequest",
    "SearchResponse",
    "SearchResultItem",
    "SearchService",
    "clean_filters",
    "display_score",
    "generate_highlight",
    "sanitize_query",
]
