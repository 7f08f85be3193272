"""Translation of search filters into engine predicate clauses.

``build_clauses`` returns a list of clause values. Each clause renders itself
into the engine's filter expression language and can also evaluate itself
against a document, which lets the in-memory engine share the exact
semantics of the remote one.

Clause order is fixed:

1. expiry (always present)
2. ids
3. kinds
4. since
5. until
6. authors
7. one clause per generic tag group, in input order
8. d tag values
"""

import time
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from relay_search.events.models import SearchFilter

__all__ = [
    "Clause",
    "DEFAULT_LIMIT",
    "InClause",
    "MAX_LIMIT",
    "NotExpiredClause",
    "RangeClause",
    "build_clauses",
    "resolve_limit",
]

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

Scalar = str | int


def _render_value(value: Scalar) -> str:
    if isinstance(value, bool):
        raise TypeError("boolean filter values are not supported")
    if isinstance(value, int):
        return str(value)
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


class Clause(ABC):
    """One predicate of the conjunction sent to the engine."""

    @abstractmethod
    def to_expression(self) -> str:
        """Render the clause in the engine's filter expression language."""
        pass

    @abstractmethod
    def matches(self, document: Mapping[str, Any]) -> bool:
        """Evaluate the clause against a stored document."""
        pass


@dataclass(frozen=True)
class NotExpiredClause(Clause):
    """Document has no expiry or expires at or after ``now``."""

    now: int

    def to_expression(self) -> str:
        return f"expiredAt IS NULL OR expiredAt >= {self.now}"

    def matches(self, document: Mapping[str, Any]) -> bool:
        expired_at = document.get("expiredAt")
        return expired_at is None or expired_at >= self.now


@dataclass(frozen=True)
class InClause(Clause):
    """Field value is one of ``values``.

    For array fields the clause holds when any element is one of ``values``.
    """

    field: str
    values: tuple[Scalar, ...]

    def to_expression(self) -> str:
        rendered = ", ".join(_render_value(value) for value in self.values)
        return f"{self.field} IN [{rendered}]"

    def matches(self, document: Mapping[str, Any]) -> bool:
        value = document.get(self.field)
        if value is None:
            return False
        if isinstance(value, list):
            return any(item in self.values for item in value)
        return value in self.values


@dataclass(frozen=True)
class RangeClause(Clause):
    """Numeric comparison of a field against a bound."""

    field: str
    operator: str
    value: int

    _OPERATORS = (">=", "<=")

    def __post_init__(self) -> None:
        if self.operator not in self._OPERATORS:
            raise ValueError(
                f"Unsupported range operator: {self.operator}. "
                f"Supported: {list(self._OPERATORS)}"
            )

    def to_expression(self) -> str:
        return f"{self.field} {self.operator} {self.value}"

    def matches(self, document: Mapping[str, Any]) -> bool:
        value = document.get(self.field)
        if value is None:
            return False
        if self.operator == ">=":
            return value >= self.value
        return value <= self.value


def _in_clause(field: str, values: Sequence[Scalar]) -> InClause | None:
    if not values:
        return None
    return InClause(field=field, values=tuple(values))


def build_clauses(search_filter: SearchFilter, now: int | None = None) -> list[Clause]:
    """Translate a search filter into an ordered list of clauses.

    Args:
        search_filter: Filter to translate
        now: Current time in seconds; read from the clock when omitted

    Returns:
        Clauses to be applied as a conjunction. Constraints without values
        are left out entirely.
    """
    if now is None:
        now = int(time.time())

    candidates: list[Clause | None] = [
        NotExpiredClause(now=now),
        _in_clause("id", search_filter.ids),
        _in_clause("kind", search_filter.kinds),
        (
            RangeClause("createdAt", ">=", search_filter.since)
            if search_filter.since is not None
            else None
        ),
        (
            RangeClause("createdAt", "<=", search_filter.until)
            if search_filter.until is not None
            else None
        ),
        _in_clause("author", search_filter.authors),
    ]
    candidates.extend(
        _in_clause("genericTags", group)
        for group in search_filter.generic_tags_collection
    )
    candidates.append(_in_clause("dTagValue", search_filter.d_tag_values))

    return [clause for clause in candidates if clause is not None]


def resolve_limit(
    search_filter: SearchFilter, default_limit: int = DEFAULT_LIMIT
) -> int:
    """Return the number of results to request, capped at MAX_LIMIT."""
    limit = default_limit if search_filter.limit is None else search_filter.limit
    return min(limit, MAX_LIMIT)
