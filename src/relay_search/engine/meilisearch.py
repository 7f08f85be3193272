"""Meilisearch engine client."""

from collections.abc import Sequence
from typing import Any

from meilisearch_python_sdk import AsyncClient
from meilisearch_python_sdk.models.settings import MeilisearchSettings

from relay_search.errors import EngineError
from relay_search.index.documents import EventDocument
from relay_search.index.filters import Clause
from relay_search.index.settings import IndexSettings

from .base import SearchEngine, SearchHit

_RANKING_SCORE = "_rankingScore"


class MeilisearchEngine(SearchEngine):
    """Search engine implementation backed by a Meilisearch index."""

    def __init__(
        self,
        url: str,
        api_key: str,
        index_name: str = "events",
        timeout: int | None = None,
    ) -> None:
        """Initialize the Meilisearch client.

        Args:
            url: Meilisearch server URL
            api_key: API key with document and settings permissions
            index_name: Index holding event documents
            timeout: Request timeout in seconds
        """
        self._client = AsyncClient(url, api_key, timeout=timeout)
        self._index = self._client.index(index_name)

    async def update_settings(self, settings: IndexSettings) -> None:
        """Apply the index capability contract."""
        body = MeilisearchSettings(
            searchable_attributes=list(settings.searchable_attributes),
            filterable_attributes=list(settings.filterable_attributes),
            sortable_attributes=list(settings.sortable_attributes),
            ranking_rules=list(settings.ranking_rules),
        )
        try:
            await self._index.update_settings(body)
        except Exception as e:
            raise EngineError(f"Failed to update index settings: {e}") from e

    async def add_documents(self, documents: Sequence[EventDocument]) -> None:
        """Upsert documents keyed by id."""
        try:
            await self._index.add_documents(
                [dict(document) for document in documents], primary_key="id"
            )
        except Exception as e:
            raise EngineError(f"Failed to add documents: {e}") from e

    async def delete_documents(self, ids: Sequence[str]) -> None:
        """Delete documents by id."""
        try:
            await self._index.delete_documents(list(ids))
        except Exception as e:
            raise EngineError(f"Failed to delete documents: {e}") from e

    async def search(
        self,
        query: str,
        clauses: Sequence[Clause],
        limit: int,
        sort: Sequence[str] | None = None,
        attributes_to_retrieve: Sequence[str] | None = None,
        show_ranking_score: bool = False,
    ) -> list[SearchHit]:
        """Search the index, rendering clauses as filter expressions."""
        try:
            result = await self._index.search(
                query,
                limit=limit,
                filter=[clause.to_expression() for clause in clauses],
                sort=list(sort) if sort else None,
                attributes_to_retrieve=(
                    list(attributes_to_retrieve) if attributes_to_retrieve else None
                ),
                show_ranking_score=show_ranking_score,
            )
        except Exception as e:
            raise EngineError(f"Search failed: {e}") from e

        return [self._to_hit(hit) for hit in result.hits]

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    @staticmethod
    def _to_hit(hit: dict[str, Any]) -> SearchHit:
        document = {k: v for k, v in hit.items() if not k.startswith("_")}
        return SearchHit(document=document, ranking_score=hit.get(_RANKING_SCORE))
