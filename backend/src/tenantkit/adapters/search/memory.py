"""In-memory ranked search over a fixed item collection.

Scoring, per query term: title +10, any tag +5, description +3,
content +1. The sum is boosted 1.5x for items under 7 days old and 1.2x
for items under 30 days old. Ties keep collection order.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from datetime import datetime

import structlog

from tenantkit.core.search.types import SearchFilters
from tenantkit.core.types import SearchableItem, utc_now

logger = structlog.get_logger()

TITLE_WEIGHT = 10
TAG_WEIGHT = 5
DESCRIPTION_WEIGHT = 3
CONTENT_WEIGHT = 1


def _terms(query: str) -> list[str]:
    return query.lower().split()


def matches(item: SearchableItem, terms: list[str]) -> bool:
    """Whether any term occurs in the item's searchable text."""
    if not terms:
        return True
    title = item.title.lower()
    description = item.description.lower()
    content = item.content.lower()
    category = item.category.lower()
    tags = [t.lower() for t in item.tags]
    return any(
        term in title
        or term in description
        or term in content
        or term in category
        or any(term in tag for tag in tags)
        for term in terms
    )


def relevance_score(item: SearchableItem, terms: list[str], now: datetime) -> float:
    """Score an item against the query terms, boosted by recency."""
    if not terms:
        return 0.0

    title = item.title.lower()
    description = item.description.lower()
    content = item.content.lower()
    tags = [t.lower() for t in item.tags]

    score = 0.0
    for term in terms:
        if term in title:
            score += TITLE_WEIGHT
        if any(term in tag for tag in tags):
            score += TAG_WEIGHT
        if term in description:
            score += DESCRIPTION_WEIGHT
        if term in content:
            score += CONTENT_WEIGHT

    age_days = (now - item.created_at).total_seconds() / 86400
    if age_days < 7:
        score *= 1.5
    elif age_days < 30:
        score *= 1.2
    return score


class InMemorySearchRepository:
    """Search backend over items held in process.

    Named filters are not applied by this backend; only the legacy
    category and type filters narrow results.
    """

    def __init__(
        self,
        items: Iterable[SearchableItem] = (),
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._items = list(items)
        self._clock = clock

    def _matching(self, terms: list[str]) -> list[SearchableItem]:
        return [item for item in self._items if item.is_active and matches(item, terms)]

    async def search(
        self,
        query: str,
        page_number: int = 1,
        page_size: int = 10,
        category: str | None = None,
        type: str | None = None,
        filters: SearchFilters | None = None,
    ) -> tuple[list[SearchableItem], int]:
        terms = _terms(query)
        candidates = self._matching(terms)

        if category:
            candidates = [i for i in candidates if i.category.lower() == category.lower()]
        if type:
            candidates = [i for i in candidates if i.type.lower() == type.lower()]

        total = len(candidates)
        now = self._clock()
        ranked = sorted(candidates, key=lambda i: relevance_score(i, terms, now), reverse=True)

        offset = (page_number - 1) * page_size
        page = [i.model_copy(deep=True) for i in ranked[offset : offset + page_size]]

        logger.debug("memory_search_completed", query=query, results=len(page), total=total)
        return page, total

    async def facet_counts(
        self,
        query: str,
        filters: SearchFilters | None = None,
    ) -> dict[str, int]:
        candidates = self._matching(_terms(query))
        facets: dict[str, int] = {}
        facets.update(Counter(f"type:{i.type}" for i in candidates))
        facets.update(Counter(f"category:{i.category}" for i in candidates))
        return facets
