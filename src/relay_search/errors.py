"""Exceptions raised by the search layer."""


class RelaySearchError(Exception):
    """Base exception for search layer operations."""

    pass


class EngineError(RelaySearchError):
    """Raised when the search engine rejects or fails a request."""

    pass
