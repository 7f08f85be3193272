"""Tests for MeilisearchEngine request shaping."""

from collections.abc import Iterator
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from relay_search.engine.meilisearch import MeilisearchEngine
from relay_search.errors import EngineError
from relay_search.index import INDEX_SETTINGS, InClause, NotExpiredClause


@pytest.fixture
def mock_client() -> Iterator[MagicMock]:
    """Patch the Meilisearch AsyncClient."""
    with patch("relay_search.engine.meilisearch.AsyncClient") as client_cls:
        client = client_cls.return_value
        client.aclose = AsyncMock()
        index = client.index.return_value
        index.update_settings = AsyncMock()
        index.add_documents = AsyncMock()
        index.delete_documents = AsyncMock()
        index.search = AsyncMock(return_value=SimpleNamespace(hits=[]))
        yield client_cls


@pytest.fixture
def engine(mock_client: MagicMock) -> MeilisearchEngine:
    return MeilisearchEngine("http://localhost:7700", "key", index_name="events")


@pytest.fixture
def index(mock_client: MagicMock) -> MagicMock:
    return mock_client.return_value.index.return_value


class TestMeilisearchEngine:
    """Test suite for MeilisearchEngine."""

    def test_connects_to_configured_index(self, mock_client: MagicMock) -> None:
        MeilisearchEngine("http://meili:7700", "secret", index_name="notes", timeout=3)

        mock_client.assert_called_once_with("http://meili:7700", "secret", timeout=3)
        mock_client.return_value.index.assert_called_once_with("notes")

    async def test_update_settings_body(
        self, engine: MeilisearchEngine, index: MagicMock
    ) -> None:
        await engine.update_settings(INDEX_SETTINGS)

        body = index.update_settings.call_args.args[0]
        assert body.searchable_attributes == ["content"]
        assert body.sortable_attributes == ["createdAt"]
        assert "expiredAt" in body.filterable_attributes
        assert "genericTags" in body.filterable_attributes
        assert body.ranking_rules[0] == "sort"
        assert body.ranking_rules[-1] == "createdAt:desc"

    async def test_add_documents_keyed_by_id(
        self, engine: MeilisearchEngine, index: MagicMock
    ) -> None:
        await engine.add_documents([{"id": "a"}])  # type: ignore[list-item]

        index.add_documents.assert_awaited_once_with([{"id": "a"}], primary_key="id")

    async def test_delete_documents(
        self, engine: MeilisearchEngine, index: MagicMock
    ) -> None:
        await engine.delete_documents(("a", "b"))

        index.delete_documents.assert_awaited_once_with(["a", "b"])

    async def test_search_renders_clauses(
        self, engine: MeilisearchEngine, index: MagicMock
    ) -> None:
        await engine.search(
            "hello",
            clauses=[NotExpiredClause(now=10), InClause("kind", (1,))],
            limit=5,
            sort=["createdAt:desc"],
        )

        index.search.assert_awaited_once_with(
            "hello",
            limit=5,
            filter=["expiredAt IS NULL OR expiredAt >= 10", "kind IN [1]"],
            sort=["createdAt:desc"],
            attributes_to_retrieve=None,
            show_ranking_score=False,
        )

    async def test_search_extracts_ranking_score(
        self, engine: MeilisearchEngine, index: MagicMock
    ) -> None:
        index.search.return_value = SimpleNamespace(
            hits=[{"id": "a", "createdAt": 100, "_rankingScore": 0.25}]
        )

        hits = await engine.search(
            "",
            clauses=[],
            limit=5,
            attributes_to_retrieve=["id", "createdAt"],
            show_ranking_score=True,
        )

        assert hits[0].document == {"id": "a", "createdAt": 100}
        assert hits[0].ranking_score == 0.25
        assert index.search.call_args.kwargs["attributes_to_retrieve"] == [
            "id",
            "createdAt",
        ]

    async def test_failures_raise_engine_error(
        self, engine: MeilisearchEngine, index: MagicMock
    ) -> None:
        index.search.side_effect = RuntimeError("connection refused")
        index.add_documents.side_effect = RuntimeError("connection refused")
        index.delete_documents.side_effect = RuntimeError("connection refused")
        index.update_settings.side_effect = RuntimeError("connection refused")

        with pytest.raises(EngineError, match="connection refused"):
            await engine.search("", clauses=[], limit=1)
        with pytest.raises(EngineError, match="connection refused"):
            await engine.add_documents([])
        with pytest.raises(EngineError, match="Failed to delete documents"):
            await engine.delete_documents(["a"])
        with pytest.raises(EngineError, match="Failed to update index settings"):
            await engine.update_settings(INDEX_SETTINGS)

    async def test_close(
        self, engine: MeilisearchEngine, mock_client: MagicMock
    ) -> None:
        await engine.close()

        mock_client.return_value.aclose.assert_awaited_once()
