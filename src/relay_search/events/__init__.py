"""Event model, filters and kind constants."""

from .constants import (
    STANDARD_SINGLE_LETTER_TAG_NAMES,
    EventKind,
    EventType,
    TagName,
    get_event_type,
)
from .models import Event, EventIdWithScore, SearchFilter

__all__ = [
    "Event",
    "EventIdWithScore",
    "EventKind",
    "EventType",
    "STANDARD_SINGLE_LETTER_TAG_NAMES",
    "SearchFilter",
    "TagName",
    "get_event_type",
]
