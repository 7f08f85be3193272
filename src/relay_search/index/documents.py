"""Mapping between events and the flat documents stored in the engine.

Field names follow the engine-side attribute names declared in
``relay_search.index.settings``. Tag rows are stored as-is under ``tags``; the
derived ``name:value`` strings are stored separately under ``genericTags`` so
tag filters are plain array membership tests.
"""

from typing import Any, TypedDict

from relay_search.events.models import Event

__all__ = ["EventDocument", "from_document", "to_document"]


class EventDocument(TypedDict):
    id: str
    pubkey: str
    author: str
    createdAt: int
    kind: int
    tags: list[list[str]]
    genericTags: list[str]
    content: str
    sig: str
    expiredAt: int | None
    dTagValue: str | None


def _as_int(value: Any) -> int | None:
    # Engines may hand numbers back as floats (e.g. 1700000000.0).
    if value is None:
        return None
    return int(value)


def to_document(event: Event) -> EventDocument:
    """Flatten an event into an index document."""
    return {
        "id": event.id,
        "pubkey": event.pubkey,
        "author": event.author,
        "createdAt": event.created_at,
        "kind": event.kind,
        "tags": [list(tag) for tag in event.tags],
        "genericTags": list(event.generic_tags),
        "content": event.content,
        "sig": event.sig,
        "expiredAt": event.expired_at,
        "dTagValue": event.d_tag_value,
    }


def from_document(document: EventDocument | dict[str, Any]) -> Event:
    """Rebuild an event from a hydrated search hit.

    Missing optional fields come back as None, never as 0 or "". A partial
    projection never raises: absent required strings become "" and absent
    required numbers become 0.
    """
    pubkey = document.get("pubkey") or ""
    return Event(
        id=document.get("id") or "",
        pubkey=pubkey,
        author=document.get("author") or pubkey,
        created_at=_as_int(document.get("createdAt")) or 0,
        kind=_as_int(document.get("kind")) or 0,
        tags=[list(tag) for tag in document.get("tags") or []],
        generic_tags=list(document.get("genericTags") or []),
        content=document.get("content") or "",
        sig=document.get("sig") or "",
        expired_at=_as_int(document.get("expiredAt")),
        d_tag_value=document.get("dTagValue"),
    )
