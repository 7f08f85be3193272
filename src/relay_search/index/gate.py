"""Decides which event kinds are copied into the search index."""

from collections.abc import Iterable


class SyncGate:
    """Allow-list of event kinds eligible for indexing."""

    def __init__(self, kinds: Iterable[int]) -> None:
        self._kinds = frozenset(kinds)

    @property
    def kinds(self) -> frozenset[int]:
        return self._kinds

    def should_index(self, kind: int) -> bool:
        """Return True if events of this kind belong in the index."""
        return kind in self._kinds
