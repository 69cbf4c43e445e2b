"""Tests for the in-memory search backend."""

from datetime import UTC, datetime, timedelta

import pytest
from tenantkit.adapters.search import InMemorySearchRepository
from tenantkit.adapters.search.memory import matches, relevance_score
from tenantkit.core.types import SearchableItem
from tenantkit.demo.catalog import build_catalog

NOW = datetime(2026, 6, 1, tzinfo=UTC)


def _item(item_id: str, age_days: int = 90, **fields: object) -> SearchableItem:
    return SearchableItem(id=item_id, created_at=NOW - timedelta(days=age_days), **fields)


@pytest.fixture
def repository() -> InMemorySearchRepository:
    """Create a backend over a small fixed collection."""
    items = [
        _item("content", title="Intro", content="notes on python", type="article",
              category="Tech"),
        _item("title", title="Python Basics", type="tutorial", category="Tech"),
        _item("tag", title="Scripting", tags=["Python"], type="article", category="Guides"),
        _item("other", title="Gardening", content="roses", type="article", category="Home"),
        _item("hidden", title="Python Archive", is_active=False, type="article",
              category="Tech"),
    ]
    return InMemorySearchRepository(items, clock=lambda: NOW)


class TestScoring:
    """Test relevance scoring."""

    def test_field_weights(self) -> None:
        """Title, tag, description and content hits add their weights."""
        item = _item(
            "x", title="python", tags=["python"], description="python", content="python"
        )
        assert relevance_score(item, ["python"], NOW) == 19

    def test_recency_boost(self) -> None:
        """Recent items are boosted."""
        assert relevance_score(_item("a", 3, title="python"), ["python"], NOW) == 15
        assert relevance_score(_item("b", 10, title="python"), ["python"], NOW) == 12
        assert relevance_score(_item("c", 60, title="python"), ["python"], NOW) == 10

    def test_category_matches_but_does_not_score(self) -> None:
        """Category text makes an item match without adding score."""
        item = _item("x", category="Python")
        assert matches(item, ["python"])
        assert relevance_score(item, ["python"], NOW) == 0


class TestSearch:
    """Test ranked search."""

    async def test_ranks_title_over_tag_over_content(
        self, repository: InMemorySearchRepository
    ) -> None:
        """Title matches outrank tag matches, which outrank content matches."""
        items, total = await repository.search("python")

        assert [i.id for i in items] == ["title", "tag", "content"]
        assert total == 3

    async def test_inactive_items_excluded(self, repository: InMemorySearchRepository) -> None:
        """Inactive items never appear."""
        items, _ = await repository.search("archive")
        assert items == []

    async def test_empty_query_returns_everything_in_order(
        self, repository: InMemorySearchRepository
    ) -> None:
        """With no terms, all active items tie and keep collection order."""
        items, total = await repository.search("")

        assert [i.id for i in items] == ["content", "title", "tag", "other"]
        assert total == 4

    async def test_category_and_type_filters(
        self, repository: InMemorySearchRepository
    ) -> None:
        """Legacy filters match case-insensitively."""
        items, total = await repository.search("python", category="tech", type="ARTICLE")

        assert [i.id for i in items] == ["content"]
        assert total == 1

    async def test_named_filters_ignored(self, repository: InMemorySearchRepository) -> None:
        """Named filters do not narrow in-memory results."""
        _, total = await repository.search("python", filters={"category": ["Home"]})
        assert total == 3

    async def test_paging(self, repository: InMemorySearchRepository) -> None:
        """Pages slice the ranked list but the total covers all matches."""
        items, total = await repository.search("python", page_number=2, page_size=2)

        assert [i.id for i in items] == ["content"]
        assert total == 3

    async def test_page_past_end(self, repository: InMemorySearchRepository) -> None:
        """A page beyond the results is empty."""
        items, total = await repository.search("python", page_number=5, page_size=2)
        assert items == []
        assert total == 3


class TestFacets:
    """Test facet counting."""

    async def test_counts_type_and_category(self, repository: InMemorySearchRepository) -> None:
        """Facets are counted over matching active items."""
        facets = await repository.facet_counts("python")

        assert facets == {
            "type:article": 2,
            "type:tutorial": 1,
            "category:Tech": 2,
            "category:Guides": 1,
        }


class TestDemoCatalog:
    """Test the bundled demo content."""

    async def test_catalog_is_searchable(self) -> None:
        """The demo catalogue answers a typical query."""
        repository = InMemorySearchRepository(build_catalog(NOW), clock=lambda: NOW)

        items, total = await repository.search("security")

        assert total > 0
        assert all(i.is_active for i in items)

    def test_ages_are_relative(self) -> None:
        """Creation times are offsets from the build time."""
        catalog = build_catalog(NOW)
        assert all(item.created_at <= NOW for item in catalog)
        assert len({item.id for item in catalog}) == len(catalog)
