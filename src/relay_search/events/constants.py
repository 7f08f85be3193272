"""Event kinds, tag names and kind classification."""

from enum import Enum, IntEnum

__all__ = [
    "EventKind",
    "EventType",
    "STANDARD_SINGLE_LETTER_TAG_NAMES",
    "TagName",
    "get_event_type",
]


class EventKind(IntEnum):
    """Well-known event kinds and the bounds of the kind ranges."""

    SET_METADATA = 0
    TEXT_NOTE = 1
    RECOMMEND_SERVER = 2
    CONTACT_LIST = 3
    ENCRYPTED_DIRECT_MESSAGE = 4
    DELETION = 5

    CHANNEL_CREATION = 40
    CHANNEL_METADATA = 41
    CHANNEL_MESSAGE = 42
    CHANNEL_HIDE_MESSAGE = 43
    CHANNEL_MUTE_USER = 44
    CHANNEL_RESERVE_FIRST = 45
    CHANNEL_RESERVE_LAST = 49

    REGULAR_FIRST = 1000
    REGULAR_LAST = 9999

    REPLACEABLE_FIRST = 10000
    REPLACEABLE_LAST = 19999

    EPHEMERAL_FIRST = 20000
    AUTHENTICATION = 22242
    EPHEMERAL_LAST = 29999

    PARAMETERIZED_REPLACEABLE_FIRST = 30000
    PARAMETERIZED_REPLACEABLE_LAST = 39999


class TagName(str, Enum):
    """Tag names with special meaning to the relay."""

    EVENT = "e"
    PUBKEY = "p"
    D = "d"
    NONCE = "nonce"
    EXPIRATION = "expiration"
    DELEGATION = "delegation"
    RELAY = "relay"
    CHALLENGE = "challenge"


STANDARD_SINGLE_LETTER_TAG_NAMES: frozenset[str] = frozenset(
    {
        "a",  # coordinates to an event
        "d",  # identifier
        "e",  # event id (hex)
        "g",  # geohash
        "i",  # identity
        "l",  # label, label namespace
        "L",  # label namespace
        "p",  # pubkey (hex)
        "r",  # a reference (URL, etc)
        "t",  # hashtag
    }
)


class EventType(str, Enum):
    """Storage semantics of an event kind."""

    REGULAR = "REGULAR"
    REPLACEABLE = "REPLACEABLE"
    EPHEMERAL = "EPHEMERAL"
    DELETION = "DELETION"
    PARAMETERIZED_REPLACEABLE = "PARAMETERIZED_REPLACEABLE"


def get_event_type(kind: int) -> EventType:
    """Classify an event kind.

    Kinds 0 (metadata) and 3 (contact list) are replaceable despite sitting
    outside the replaceable range.
    """
    if kind == EventKind.DELETION:
        return EventType.DELETION
    if (
        kind in (EventKind.SET_METADATA, EventKind.CONTACT_LIST)
        or EventKind.REPLACEABLE_FIRST <= kind <= EventKind.REPLACEABLE_LAST
    ):
        return EventType.REPLACEABLE
    if EventKind.EPHEMERAL_FIRST <= kind <= EventKind.EPHEMERAL_LAST:
        return EventType.EPHEMERAL
    if (
        EventKind.PARAMETERIZED_REPLACEABLE_FIRST
        <= kind
        <= EventKind.PARAMETERIZED_REPLACEABLE_LAST
    ):
        return EventType.PARAMETERIZED_REPLACEABLE
    return EventType.REGULAR
