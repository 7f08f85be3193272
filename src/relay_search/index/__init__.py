"""Pure building blocks for the event search index."""

from .documents import EventDocument, from_document, to_document
from .filters import (
    DEFAULT_LIMIT,
    MAX_LIMIT,
    Clause,
    InClause,
    NotExpiredClause,
    RangeClause,
    build_clauses,
    resolve_limit,
)
from .gate import SyncGate
from .scoring import score
from .settings import INDEX_SETTINGS, IndexSettings

__all__ = [
    "Clause",
    "DEFAULT_LIMIT",
    "EventDocument",
    "INDEX_SETTINGS",
    "InClause",
    "IndexSettings",
    "MAX_LIMIT",
    "NotExpiredClause",
    "RangeClause",
    "SyncGate",
    "build_clauses",
    "from_document",
    "resolve_limit",
    "score",
    "to_document",
]
