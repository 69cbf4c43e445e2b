"""Tests for the Azure AI Search backend."""

from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from tenantkit.adapters.search.azure import AzureSearchRepository
from tenantkit.config import SearchIndexSettings


class FakeResults:
    """Async iterable standing in for a paged search response."""

    def __init__(
        self,
        documents: list[dict[str, Any]],
        count: int | None = None,
        facets: dict[str, list[dict[str, Any]]] | None = None,
    ) -> None:
        self._documents = documents
        self._count = count
        self._facets = facets

    def __aiter__(self):  # type: ignore[no-untyped-def]
        return self._iterate()

    async def _iterate(self):  # type: ignore[no-untyped-def]
        for document in self._documents:
            yield document

    async def get_count(self) -> int | None:
        return self._count

    async def get_facets(self) -> dict[str, list[dict[str, Any]]] | None:
        return self._facets


@pytest.fixture
def settings() -> SearchIndexSettings:
    """Index settings with filters and facets configured."""
    settings = SearchIndexSettings()
    settings.endpoint = "https://search.example.net"
    settings.api_key = "test-key"  # pragma: allowlist secret
    settings.index_name = "papers"
    settings.filter_fields = ["source", "text_source"]
    settings.default_filters = ["commercial_safe eq true"]
    settings.facet_fields = ["source", "year,count:5"]
    settings.facet_count = 10
    settings.select_fields = []
    settings.vector_search_enabled = False
    return settings


@pytest.fixture
def client() -> MagicMock:
    """Create mock search client."""
    client = MagicMock()
    client.close = AsyncMock()
    return client


class TestAzureSearchRepository:
    """Test query composition and result mapping."""

    def test_requires_configuration(self) -> None:
        """Without a client, incomplete settings are rejected."""
        settings = SearchIndexSettings()
        settings.endpoint = ""
        with pytest.raises(ValueError, match="not configured"):
            AzureSearchRepository(settings)

    async def test_search_composes_options(
        self, settings: SearchIndexSettings, client: MagicMock
    ) -> None:
        """Filters, paging and facets are passed to the client."""
        client.search = AsyncMock(
            return_value=FakeResults(
                [{"chunk_id": "c1", "title": "First"}, {"title": "no id"}, {"id": "c2"}],
                count=42,
            )
        )
        repository = AzureSearchRepository(settings, client=client)

        items, total = await repository.search(
            "gene therapy", page_number=3, page_size=10, category="pubmed"
        )

        assert [i.id for i in items] == ["c1", "c2"]
        assert total == 42
        client.search.assert_awaited_once_with(
            search_text="gene therapy",
            filter="commercial_safe eq true and source eq 'pubmed'",
            top=10,
            skip=20,
            include_total_count=True,
            select=None,
            facets=["source,count:10", "year,count:5"],
            vector_queries=None,
        )

    async def test_empty_query_matches_all(
        self, settings: SearchIndexSettings, client: MagicMock
    ) -> None:
        """An empty query searches for everything."""
        client.search = AsyncMock(return_value=FakeResults([], count=None))
        repository = AzureSearchRepository(settings, client=client)

        items, total = await repository.search("")

        assert items == []
        assert total == 0
        assert client.search.await_args.kwargs["search_text"] == "*"

    async def test_vector_query_when_enabled(
        self, settings: SearchIndexSettings, client: MagicMock
    ) -> None:
        """Hybrid mode adds a vectorizable text query."""
        settings.vector_search_enabled = True
        settings.vector_field = "chunkVector"
        settings.vector_k = 7
        client.search = AsyncMock(return_value=FakeResults([], count=0))
        repository = AzureSearchRepository(settings, client=client)

        await repository.search("gene therapy")

        (vector_query,) = client.search.await_args.kwargs["vector_queries"]
        assert vector_query.text == "gene therapy"
        assert vector_query.k_nearest_neighbors == 7
        assert vector_query.fields == "chunkVector"

    async def test_facet_counts(self, settings: SearchIndexSettings, client: MagicMock) -> None:
        """Facet buckets are flattened to field:value keys, skipping blanks."""
        client.search = AsyncMock(
            return_value=FakeResults(
                [],
                facets={
                    "source": [{"value": "pubmed", "count": 30}, {"value": "", "count": 2}],
                    "year": [{"value": 2024, "count": 12}],
                },
            )
        )
        repository = AzureSearchRepository(settings, client=client)

        facets = await repository.facet_counts("gene", filters={"year": ["2024"]})

        assert facets == {"source:pubmed": 30, "year:2024": 12}
        kwargs = client.search.await_args.kwargs
        assert kwargs["top"] == 0
        assert kwargs["filter"] == "commercial_safe eq true and year eq '2024'"

    async def test_no_facet_fields(self, settings: SearchIndexSettings, client: MagicMock) -> None:
        """Without facet fields the index is not queried for facets."""
        settings.facet_fields = []
        client.search = AsyncMock()
        repository = AzureSearchRepository(settings, client=client)

        assert await repository.facet_counts("gene") == {}
        client.search.assert_not_called()

    async def test_close(self, settings: SearchIndexSettings, client: MagicMock) -> None:
        """Closing the backend closes the client."""
        await AzureSearchRepository(settings, client=client).close()
        client.close.assert_awaited_once()
