"""Pytest configuration and fixtures."""

from collections.abc import Callable
from typing import Any

import pytest

from relay_search.events.models import Event

# Enable pytest-asyncio for all tests
pytest_plugins = ("pytest_asyncio",)

PUBKEY = "a" * 64

EventFactory = Callable[..., Event]


@pytest.fixture
def raw_event() -> dict[str, Any]:
    """Wire dictionary for a tagged text note."""
    return {
        "id": "1" * 64,
        "pubkey": PUBKEY,
        "created_at": 1_700_000_000,
        "kind": 1,
        "tags": [
            ["e", "2" * 64],
            ["p", "3" * 64],
            ["t", "nostr"],
            ["t", "nostr"],
            ["nonce", "12", "20"],
        ],
        "content": "hello nostr world",
        "sig": "f" * 128,
    }


@pytest.fixture
def event(raw_event: dict[str, Any]) -> Event:
    """Event built from the tagged text note."""
    return Event.from_raw(raw_event)


@pytest.fixture
def make_event() -> EventFactory:
    """Factory building events directly, bypassing tag derivation."""

    def _make(
        id: str,
        kind: int = 1,
        created_at: int = 1_700_000_000,
        content: str = "",
        generic_tags: list[str] | None = None,
        expired_at: int | None = None,
        d_tag_value: str | None = None,
        author: str = PUBKEY,
    ) -> Event:
        return Event(
            id=id,
            pubkey=PUBKEY,
            author=author,
            created_at=created_at,
            kind=kind,
            tags=[tag.split(":", 1) for tag in generic_tags or []],
            generic_tags=list(generic_tags or []),
            content=content,
            sig="f" * 128,
            expired_at=expired_at,
            d_tag_value=d_tag_value,
        )

    return _make
