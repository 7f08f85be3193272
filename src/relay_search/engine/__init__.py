"""Search engine clients."""

from .base import SearchEngine, SearchHit
from .memory import InMemorySearchEngine

# Note: MeilisearchEngine is not imported here so the in-memory engine can be
# used without loading the Meilisearch client. Import it from
# relay_search.engine.meilisearch directly.

__all__ = [
    "InMemorySearchEngine",
    "SearchEngine",
    "SearchHit",
]
