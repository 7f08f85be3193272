"""Base classes and types for search engine clients."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from relay_search.index.documents import EventDocument
from relay_search.index.filters import Clause
from relay_search.index.settings import IndexSettings


@dataclass
class SearchHit:
    """A single document returned by a search.

    ``document`` holds only the retrieved attributes when a projection was
    requested. ``ranking_score`` is None unless scores were requested.
    """

    document: dict[str, Any]
    ranking_score: float | None = None


class SearchEngine(ABC):
    """Abstract base class for full-text search engine clients."""

    @abstractmethod
    async def update_settings(self, settings: IndexSettings) -> None:
        """Declare searchable, filterable and sortable attributes.

        Args:
            settings: Capability contract for the event index
        """
        pass

    @abstractmethod
    async def add_documents(self, documents: Sequence[EventDocument]) -> None:
        """Insert or replace documents, keyed by ``id``.

        Args:
            documents: Documents to upsert
        """
        pass

    @abstractmethod
    async def delete_documents(self, ids: Sequence[str]) -> None:
        """Delete documents by id. Unknown ids are ignored.

        Args:
            ids: Document ids to remove
        """
        pass

    @abstractmethod
    async def search(
        self,
        query: str,
        clauses: Sequence[Clause],
        limit: int,
        sort: Sequence[str] | None = None,
        attributes_to_retrieve: Sequence[str] | None = None,
        show_ranking_score: bool = False,
    ) -> list[SearchHit]:
        """Run a full-text search restricted by filter clauses.

        Args:
            query: Free-text query; empty matches every document
            clauses: Predicates applied as a conjunction
            limit: Maximum number of hits
            sort: Sort expressions such as ``"createdAt:desc"``
            attributes_to_retrieve: Restrict returned document fields
            show_ranking_score: Attach the engine's ranking score to each hit

        Returns:
            Hits in engine order

        Raises:
            EngineError: If the engine fails the request
        """
        pass

    async def close(self) -> None:
        """Release client resources."""
        pass
