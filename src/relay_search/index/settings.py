"""Capability contract declared to the engine at startup."""

from dataclasses import dataclass

__all__ = ["INDEX_SETTINGS", "IndexSettings"]


@dataclass(frozen=True)
class IndexSettings:
    """Searchable, filterable and sortable attributes plus ranking order."""

    searchable_attributes: tuple[str, ...]
    filterable_attributes: tuple[str, ...]
    sortable_attributes: tuple[str, ...]
    ranking_rules: tuple[str, ...]


INDEX_SETTINGS = IndexSettings(
    searchable_attributes=("content",),
    filterable_attributes=(
        "id",
        "author",
        "createdAt",
        "kind",
        "genericTags",
        "delegator",
        "expiredAt",
        "dTagValue",
    ),
    sortable_attributes=("createdAt",),
    ranking_rules=(
        "sort",
        "words",
        "typo",
        "proximity",
        "attribute",
        "exactness",
        "createdAt:desc",
    ),
)
