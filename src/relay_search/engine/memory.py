"""In-memory search engine for testing and development.

Clauses are evaluated locally with ``Clause.matches``. Text relevance is a
naive term overlap: the ranking score is the fraction of query terms found in
the document's searchable attributes, and a non-empty query only matches
documents containing at least one term.
"""

import copy
import re
from collections.abc import Sequence
from typing import Any

from relay_search.index.documents import EventDocument
from relay_search.index.filters import Clause
from relay_search.index.settings import INDEX_SETTINGS, IndexSettings

from .base import SearchEngine, SearchHit

_TOKEN = re.compile(r"\w+")


def _terms(text: str) -> set[str]:
    return {token.lower() for token in _TOKEN.findall(text)}


class InMemorySearchEngine(SearchEngine):
    """Search engine storing documents in a dict keyed by id."""

    def __init__(self) -> None:
        """Initialize an empty index."""
        self._documents: dict[str, dict[str, Any]] = {}
        self.settings: IndexSettings | None = None

    async def update_settings(self, settings: IndexSettings) -> None:
        """Record the declared settings."""
        self.settings = settings

    async def add_documents(self, documents: Sequence[EventDocument]) -> None:
        """Insert or replace documents."""
        for document in documents:
            self._documents[document["id"]] = copy.deepcopy(dict(document))

    async def delete_documents(self, ids: Sequence[str]) -> None:
        """Delete documents by id."""
        for id in ids:
            self._documents.pop(id, None)

    async def search(
        self,
        query: str,
        clauses: Sequence[Clause],
        limit: int,
        sort: Sequence[str] | None = None,
        attributes_to_retrieve: Sequence[str] | None = None,
        show_ranking_score: bool = False,
    ) -> list[SearchHit]:
        """Filter, rank and project stored documents."""
        query_terms = _terms(query)
        searchable = (self.settings or INDEX_SETTINGS).searchable_attributes

        scored: list[tuple[float, dict[str, Any]]] = []
        for document in self._documents.values():
            if not all(clause.matches(document) for clause in clauses):
                continue
            if not query_terms:
                scored.append((1.0, document))
                continue
            document_terms: set[str] = set()
            for attribute in searchable:
                document_terms |= _terms(str(document.get(attribute) or ""))
            matched = len(query_terms & document_terms)
            if matched:
                scored.append((matched / len(query_terms), document))

        # Default order mirrors the ranking rules: relevance, then recency.
        scored.sort(key=lambda item: (item[0], item[1]["createdAt"]), reverse=True)
        for expression in reversed(list(sort or [])):
            field, _, direction = expression.partition(":")
            scored.sort(key=lambda item: item[1][field], reverse=direction == "desc")

        hits = []
        for ranking_score, document in scored[:limit]:
            if attributes_to_retrieve:
                projected = {
                    k: copy.deepcopy(document[k])
                    for k in attributes_to_retrieve
                    if k in document
                }
            else:
                projected = copy.deepcopy(document)
            hits.append(
                SearchHit(
                    document=projected,
                    ranking_score=ranking_score if show_ranking_score else None,
                )
            )
        return hits

    def count(self) -> int:
        """Number of stored documents, including expired ones."""
        return len(self._documents)
