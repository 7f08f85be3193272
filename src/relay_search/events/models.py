"""Event and filter models consumed by the search layer.

Events and filters are built upstream by the protocol layer. The search layer
only reads them; nothing here mutates an instance after construction.
"""

from dataclasses import dataclass, field
from typing import Any

from .constants import (
    STANDARD_SINGLE_LETTER_TAG_NAMES,
    EventType,
    TagName,
    get_event_type,
)

__all__ = ["Event", "EventIdWithScore", "SearchFilter"]


def _first_tag(tags: list[list[str]], name: str) -> list[str] | None:
    for tag in tags:
        if tag and tag[0] == name:
            return tag
    return None


def _derive_generic_tags(tags: list[list[str]]) -> list[str]:
    generic_tags: list[str] = []
    seen: set[str] = set()
    for tag in tags:
        if len(tag) < 2 or not tag[1]:
            continue
        if tag[0] not in STANDARD_SINGLE_LETTER_TAG_NAMES:
            continue
        generic_tag = f"{tag[0]}:{tag[1]}"
        if generic_tag not in seen:
            seen.add(generic_tag)
            generic_tags.append(generic_tag)
    return generic_tags


def _derive_expired_at(tags: list[list[str]]) -> int | None:
    tag = _first_tag(tags, TagName.EXPIRATION.value)
    if tag is None or len(tag) < 2:
        return None
    try:
        return int(tag[1])
    except ValueError:
        return None


@dataclass
class Event:
    """Canonical event as stored by the relay.

    ``author`` is the effective identity the event is attributed to. It equals
    ``pubkey`` unless the event carries a delegation tag, in which case it is
    the delegator. Delegation signatures are checked upstream.
    """

    id: str
    pubkey: str
    author: str
    created_at: int
    kind: int
    tags: list[list[str]]
    generic_tags: list[str]
    content: str
    sig: str
    expired_at: int | None = None
    d_tag_value: str | None = None

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "Event":
        """Build an event from its wire dictionary, deriving indexed fields.

        Args:
            raw: Dictionary with id, pubkey, created_at, kind, tags, content, sig

        Returns:
            Event with author, generic_tags, d_tag_value and expired_at filled in

        Raises:
            KeyError: If a required wire field is missing
        """
        tags = [list(tag) for tag in raw.get("tags", [])]
        kind = int(raw["kind"])

        delegation = _first_tag(tags, TagName.DELEGATION.value)
        author = delegation[1] if delegation and len(delegation) > 1 else raw["pubkey"]

        d_tag_value: str | None = None
        if get_event_type(kind) == EventType.PARAMETERIZED_REPLACEABLE:
            d_tag = _first_tag(tags, TagName.D.value)
            d_tag_value = d_tag[1] if d_tag and len(d_tag) > 1 else ""

        return cls(
            id=raw["id"],
            pubkey=raw["pubkey"],
            author=author,
            created_at=int(raw["created_at"]),
            kind=kind,
            tags=tags,
            generic_tags=_derive_generic_tags(tags),
            content=raw.get("content", ""),
            sig=raw["sig"],
            expired_at=_derive_expired_at(tags),
            d_tag_value=d_tag_value,
        )

    def to_raw(self) -> dict[str, Any]:
        """Return the wire dictionary for this event."""
        return {
            "id": self.id,
            "pubkey": self.pubkey,
            "created_at": self.created_at,
            "kind": self.kind,
            "tags": [list(tag) for tag in self.tags],
            "content": self.content,
            "sig": self.sig,
        }


@dataclass
class SearchFilter:
    """Structured subscription filter restricted to what search understands.

    ``generic_tags_collection`` is a conjunction of disjunctions: a document
    must match at least one value of every group.
    """

    ids: list[str] = field(default_factory=list)
    authors: list[str] = field(default_factory=list)
    d_tag_values: list[str] = field(default_factory=list)
    generic_tags_collection: list[list[str]] = field(default_factory=list)
    kinds: list[int] = field(default_factory=list)
    limit: int | None = None
    search: str = ""
    search_options: list[str] = field(default_factory=list)
    since: int | None = None
    until: int | None = None

    @classmethod
    def from_filter(cls, raw: dict[str, Any]) -> "SearchFilter":
        """Build a search filter from a wire filter dictionary.

        ``#d`` values become ``d_tag_values``. Every other ``#x`` key naming a
        standard single-letter tag becomes one generic tag group of ``x:value``
        strings. ``key:value`` tokens in ``search`` are moved to
        ``search_options``.
        """
        d_tag_values: list[str] = []
        generic_tags_collection: list[list[str]] = []
        for key, values in raw.items():
            if not key.startswith("#") or not values:
                continue
            name = key[1:]
            if name == TagName.D.value:
                d_tag_values = [str(value) for value in values]
            elif name in STANDARD_SINGLE_LETTER_TAG_NAMES:
                generic_tags_collection.append([f"{name}:{value}" for value in values])

        words: list[str] = []
        search_options: list[str] = []
        for token in str(raw.get("search") or "").split():
            option, sep, value = token.partition(":")
            if sep and option.isalpha() and value:
                search_options.append(token)
            else:
                words.append(token)

        return cls(
            ids=list(raw.get("ids") or []),
            authors=list(raw.get("authors") or []),
            d_tag_values=d_tag_values,
            generic_tags_collection=generic_tags_collection,
            kinds=[int(kind) for kind in raw.get("kinds") or []],
            limit=raw.get("limit"),
            search=" ".join(words),
            search_options=search_options,
            since=raw.get("since"),
            until=raw.get("until"),
        )


@dataclass(frozen=True)
class EventIdWithScore:
    """Event id paired with its combined relevance and recency score."""

    id: str
    score: float
