"""Hybrid vector and full-text search on Azure AI Search.

Query vectorization and ranking happen inside the search service. This
backend only composes filters, facets and the vector query, then maps
returned documents onto SearchableItem.
"""

from __future__ import annotations

from typing import Any

import structlog
from azure.core.credentials import AzureKeyCredential
from azure.search.documents.aio import SearchClient
from azure.search.documents.models import VectorizableTextQuery

from tenantkit.adapters.search.filters import build_filter
from tenantkit.adapters.search.mapping import DocumentMapper
from tenantkit.config import SearchIndexSettings
from tenantkit.core.search.types import SearchFilters
from tenantkit.core.types import SearchableItem

logger = structlog.get_logger()

MATCH_ALL = "*"
DEFAULT_VECTOR_K = 5


class AzureSearchRepository:
    """Search backend for an Azure AI Search index."""

    def __init__(self, settings: SearchIndexSettings, client: SearchClient | None = None) -> None:
        """Initialize the backend.

        Args:
            settings: Index location, filter, facet and field mapping settings.
            client: Preconfigured client. Built from ``settings`` if omitted.

        Raises:
            ValueError: If no client is given and the settings are incomplete.
        """
        if client is None:
            if not settings.is_configured:
                raise ValueError(
                    "Search index is not configured. Set SEARCH_ENDPOINT, "
                    "SEARCH_API_KEY and SEARCH_INDEX_NAME."
                )
            client = SearchClient(
                endpoint=settings.endpoint.rstrip("/"),
                index_name=settings.index_name,
                credential=AzureKeyCredential(settings.api_key),
            )
        self._client = client
        self._settings = settings
        self._mapper = DocumentMapper(settings.fields)

    async def close(self) -> None:
        await self._client.close()

    def _filter(
        self,
        category: str | None,
        type: str | None,
        filters: SearchFilters | None,
    ) -> str | None:
        return build_filter(
            self._settings.default_filters,
            self._settings.filter_fields,
            category=category,
            type=type,
            filters=filters,
        )

    def _facets(self) -> list[str] | None:
        facets = [
            field if "," in field else f"{field},count:{self._settings.facet_count}"
            for field in self._settings.facet_fields
        ]
        return facets or None

    def _vector_queries(self, query: str) -> list[VectorizableTextQuery] | None:
        if not self._settings.vector_search_enabled or not self._settings.vector_field:
            return None
        k = self._settings.vector_k if self._settings.vector_k > 0 else DEFAULT_VECTOR_K
        return [
            VectorizableTextQuery(
                text=query,
                k_nearest_neighbors=k,
                fields=self._settings.vector_field,
            )
        ]

    async def search(
        self,
        query: str,
        page_number: int = 1,
        page_size: int = 10,
        category: str | None = None,
        type: str | None = None,
        filters: SearchFilters | None = None,
    ) -> tuple[list[SearchableItem], int]:
        options: dict[str, Any] = {
            "filter": self._filter(category, type, filters),
            "top": page_size,
            "skip": (page_number - 1) * page_size,
            "include_total_count": True,
            "select": self._settings.select_fields or None,
            "facets": self._facets(),
            "vector_queries": self._vector_queries(query),
        }

        response = await self._client.search(search_text=query or MATCH_ALL, **options)

        items: list[SearchableItem] = []
        async for document in response:
            item = self._mapper.map(document)
            if item is not None:
                items.append(item)
        total = await response.get_count() or 0

        logger.info(
            "index_search_completed",
            query=query,
            results=len(items),
            total=total,
            vector=options["vector_queries"] is not None,
        )
        return items, total

    async def facet_counts(
        self,
        query: str,
        filters: SearchFilters | None = None,
    ) -> dict[str, int]:
        facets = self._facets()
        if not facets:
            return {}

        response = await self._client.search(
            search_text=query or MATCH_ALL,
            filter=self._filter(None, None, filters),
            top=0,
            include_total_count=False,
            facets=facets,
        )

        counts: dict[str, int] = {}
        for field, buckets in ((await response.get_facets()) or {}).items():
            for bucket in buckets or []:
                value = bucket.get("value")
                if value is None or value == "":
                    continue
                counts[f"{field}:{value}"] = int(bucket.get("count") or 0)
        return counts
