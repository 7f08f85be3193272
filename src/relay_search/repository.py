"""Event search repository: keeps the search index in step with the relay.

Two implementations share one interface. ``EventSearchRepository`` talks to a
configured engine. ``DisabledEventSearchRepository`` is used when no engine is
configured: writes do nothing and reads return no results.
``create_event_search_repository`` picks one from settings, so callers never
check whether search is enabled. ``start_event_search`` is the startup entry
point: it configures logging, builds the repository and bootstraps the index.

Write paths are best-effort. Engine failures on add or delete are logged and
swallowed; the relay's event store stays the source of truth. Read paths let
engine failures propagate.
"""

import asyncio
from abc import ABC, abstractmethod
from collections.abc import Sequence

import structlog

from relay_search.config import SearchSettings
from relay_search.engine.base import SearchEngine
from relay_search.events.models import Event, EventIdWithScore, SearchFilter
from relay_search.index.documents import from_document, to_document
from relay_search.index.filters import build_clauses, resolve_limit
from relay_search.index.gate import SyncGate
from relay_search.index.scoring import score
from relay_search.index.settings import INDEX_SETTINGS
from relay_search.logging import configure_logging

__all__ = [
    "BaseEventSearchRepository",
    "DisabledEventSearchRepository",
    "EventSearchRepository",
    "create_event_search_repository",
    "start_event_search",
]

logger = structlog.get_logger(__name__)


class BaseEventSearchRepository(ABC):
    """Operations the relay performs against the search index."""

    @abstractmethod
    async def bootstrap(self) -> None:
        """Declare the index capabilities. Call once at startup."""
        pass

    @abstractmethod
    async def add(self, event: Event) -> None:
        """Index an event if its kind is synced."""
        pass

    @abstractmethod
    async def delete_many(self, event_ids: Sequence[str]) -> None:
        """Remove events from the index."""
        pass

    @abstractmethod
    async def replace(self, event: Event, old_event_id: str | None = None) -> None:
        """Index ``event`` and drop the event it supersedes."""
        pass

    @abstractmethod
    async def find(self, search_filter: SearchFilter) -> list[Event]:
        """Return matching events, newest first."""
        pass

    @abstractmethod
    async def find_top_ids_with_score(
        self, search_filter: SearchFilter
    ) -> list[EventIdWithScore]:
        """Return ids of the best text matches with their ranking keys."""
        pass

    async def close(self) -> None:
        """Release engine resources."""
        pass


class DisabledEventSearchRepository(BaseEventSearchRepository):
    """Stand-in used when no search engine is configured."""

    async def bootstrap(self) -> None:
        pass

    async def add(self, event: Event) -> None:
        pass

    async def delete_many(self, event_ids: Sequence[str]) -> None:
        pass

    async def replace(self, event: Event, old_event_id: str | None = None) -> None:
        pass

    async def find(self, search_filter: SearchFilter) -> list[Event]:
        return []

    async def find_top_ids_with_score(
        self, search_filter: SearchFilter
    ) -> list[EventIdWithScore]:
        return []


class EventSearchRepository(BaseEventSearchRepository):
    """Search repository backed by a live engine."""

    def __init__(self, engine: SearchEngine, gate: SyncGate) -> None:
        """Initialize repository with dependencies.

        Args:
            engine: Search engine client
            gate: Allow-list of kinds to index
        """
        self._engine = engine
        self._gate = gate

    async def bootstrap(self) -> None:
        """Declare index settings.

        Failures are logged so an unreachable engine never stops the relay
        from starting.
        """
        try:
            await self._engine.update_settings(INDEX_SETTINGS)
        except Exception as e:
            logger.warning("event_search.bootstrap_failed", error=str(e))
            return
        logger.info(
            "event_search.bootstrapped",
            sync_event_kinds=sorted(self._gate.kinds),
        )

    async def add(self, event: Event) -> None:
        """Upsert the event's document. Failures are logged, not raised."""
        if not self._gate.should_index(event.kind):
            return

        try:
            await self._engine.add_documents([to_document(event)])
        except Exception as e:
            logger.error(
                "event_search.add_failed",
                event_id=event.id,
                kind=event.kind,
                error=str(e),
                exc_info=True,
            )

    async def delete_many(self, event_ids: Sequence[str]) -> None:
        """Delete documents by event id. Failures are logged, not raised."""
        try:
            await self._engine.delete_documents(list(event_ids))
        except Exception as e:
            logger.error(
                "event_search.delete_failed",
                event_ids=list(event_ids),
                error=str(e),
                exc_info=True,
            )

    async def replace(self, event: Event, old_event_id: str | None = None) -> None:
        """Add the new event and delete the old one concurrently.

        Neither call waits on the other and there is no atomicity across the
        pair: readers may briefly see both documents, neither, or either one.
        """
        operations = [self.add(event)]
        if old_event_id:
            operations.append(self.delete_many([old_event_id]))
        await asyncio.gather(*operations)

    async def find(self, search_filter: SearchFilter) -> list[Event]:
        """Search and hydrate matching events, newest first.

        Raises:
            EngineError: If the engine fails the search
        """
        limit = resolve_limit(search_filter)
        if limit <= 0:
            return []

        hits = await self._engine.search(
            search_filter.search,
            clauses=build_clauses(search_filter),
            limit=limit,
            sort=["createdAt:desc"],
        )
        return [from_document(hit.document) for hit in hits]

    async def find_top_ids_with_score(
        self, search_filter: SearchFilter
    ) -> list[EventIdWithScore]:
        """Return scored ids of the best matches without hydrating events.

        Raises:
            EngineError: If the engine fails the search
        """
        limit = resolve_limit(search_filter)
        if limit <= 0:
            return []

        hits = await self._engine.search(
            search_filter.search,
            clauses=build_clauses(search_filter),
            limit=limit,
            attributes_to_retrieve=["id", "createdAt"],
            show_ranking_score=True,
        )
        return [
            EventIdWithScore(
                id=hit.document["id"],
                score=score(int(hit.document["createdAt"]), hit.ranking_score),
            )
            for hit in hits
        ]

    async def close(self) -> None:
        """Close the engine client."""
        await self._engine.close()


def create_event_search_repository(
    settings: SearchSettings,
) -> BaseEventSearchRepository:
    """Build the repository for the configured engine.

    Returns a DisabledEventSearchRepository when the engine host or API key
    is missing.
    """
    if not settings.is_enabled:
        logger.info("event_search.disabled")
        return DisabledEventSearchRepository()

    # Deferred so a relay without search never loads the engine client.
    from relay_search.engine.meilisearch import MeilisearchEngine

    engine = MeilisearchEngine(
        url=settings.meilisearch_host or "",
        api_key=settings.meilisearch_api_key or "",
        index_name=settings.index_name,
        timeout=settings.request_timeout,
    )
    return EventSearchRepository(engine, SyncGate(settings.sync_event_kinds))


async def start_event_search(
    settings: SearchSettings | None = None,
) -> BaseEventSearchRepository:
    """Startup path for the relay: configure logging, build and bootstrap.

    Args:
        settings: Search settings; read from the environment when omitted

    Returns:
        A bootstrapped repository, or a disabled one when search is not
        configured
    """
    if settings is None:
        settings = SearchSettings()
    configure_logging(settings)

    repository = create_event_search_repository(settings)
    await repository.bootstrap()
    return repository
