"""Search service: sanitizes queries and shapes backend results."""

from __future__ import annotations

import time

import structlog

from tenantkit.core.search.interfaces import SearchRepository
from tenantkit.core.search.sanitize import clean_filters, sanitize_query
from tenantkit.core.search.types import SearchRequest, SearchResponse, SearchResultItem
from tenantkit.core.types import SearchableItem

logger = structlog.get_logger()

HIGHLIGHT_FALLBACK_LENGTH = 150
HIGHLIGHT_LEAD = 50
HIGHLIGHT_TRAIL = 100


def display_score(index: int, total: int) -> float:
    """Map a rank position within a page onto a 0-100 score.

    The first result scores 100 and each later one steps down evenly, so
    scores mean the same thing whichever backend ranked the page.
    """
    if total == 0:
        return 0.0
    return round((total - index) / total * 100, 1)


def generate_highlight(content: str, query: str) -> str | None:
    """Extract a snippet of ``content`` around the earliest query term.

    Returns:
        A snippet with ``...`` marking trimmed ends, the leading 150
        characters when no term occurs, or None for empty input.
    """
    if not content or not query:
        return None

    lowered = content.lower()
    positions = [lowered.find(term) for term in query.lower().split()]
    found = [p for p in positions if p != -1]

    if not found:
        if len(content) > HIGHLIGHT_FALLBACK_LENGTH:
            return content[:HIGHLIGHT_FALLBACK_LENGTH] + "..."
        return content

    best = min(found)
    start = max(0, best - HIGHLIGHT_LEAD)
    end = min(len(content), best + HIGHLIGHT_TRAIL)

    snippet = content[start:end]
    if start > 0:
        snippet = "..." + snippet
    if end < len(content):
        snippet += "..."
    return snippet


def to_result_item(item: SearchableItem, index: int, total: int, query: str) -> SearchResultItem:
    return SearchResultItem(
        id=item.id,
        title=item.title,
        description=item.description,
        type=item.type,
        category=item.category,
        url=item.url,
        image_url=item.image_url,
        highlight=generate_highlight(item.content, query),
        metadata=item.metadata,
        relevance_score=display_score(index, total),
        created_at=item.created_at,
        modified_at=item.modified_at,
    )


class SearchService:
    """Runs searches against whichever backend was configured."""

    def __init__(self, repository: SearchRepository) -> None:
        """Initialize with a search backend.

        Args:
            repository: In-memory or external search backend.
        """
        self._repository = repository

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Search the index.

        The raw query is sanitized once, and only the sanitized form is
        handed to the backend. Facet counts are computed with the same
        query and filters.

        Args:
            request: Search parameters.

        Returns:
            Ranked results with display scores, highlights and facet counts.
        """
        started = time.perf_counter()
        sanitized = sanitize_query(request.search_query)
        filters = clean_filters(request.filters)

        logger.debug(
            "search_query_sanitized",
            original_length=len(request.search_query),
            sanitized=sanitized,
        )

        items, total = await self._repository.search(
            sanitized,
            page_number=request.page_number,
            page_size=request.page_size,
            category=request.category,
            type=request.type,
            filters=filters,
        )
        facets = await self._repository.facet_counts(sanitized, filters=filters)

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        results = [to_result_item(item, i, len(items), sanitized) for i, item in enumerate(items)]

        logger.info(
            "search_completed",
            query=sanitized,
            results=len(results),
            total=total,
            elapsed_ms=elapsed_ms,
        )

        return SearchResponse.create(
            results=results,
            total_results=total,
            page_number=request.page_number,
            page_size=request.page_size,
            search_query=request.search_query,
            sanitized_query=sanitized,
            search_time_ms=elapsed_ms,
            facet_counts=facets,
        )
