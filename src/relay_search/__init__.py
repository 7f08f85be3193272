"""Search index synchronization and query translation for relay events."""

__version__ = "0.1.0"
