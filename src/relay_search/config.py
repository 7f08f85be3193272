"""Search layer configuration using pydantic-settings.

All settings can be overridden via environment variables with the
RELAY_SEARCH_ prefix. For example, RELAY_SEARCH_MEILISEARCH_HOST sets the
engine endpoint. List values are read from the environment as JSON:

    RELAY_SEARCH_SYNC_EVENT_KINDS='[0, 1, 30023]'

The search layer is disabled unless both the engine host and API key are set.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["SearchSettings"]

LOG_FORMATS = ("json", "console")


class SearchSettings(BaseSettings):
    """Configuration for the event search layer."""

    model_config = SettingsConfigDict(env_prefix="RELAY_SEARCH_")

    # =========================================================================
    # Engine connection
    # =========================================================================

    meilisearch_host: str | None = Field(
        default=None,
        description="Meilisearch endpoint URL. Search is disabled when unset.",
    )

    meilisearch_api_key: str | None = Field(
        default=None,
        description="Meilisearch API key. Search is disabled when unset.",
    )

    index_name: str = Field(
        default="events",
        description="Name of the index holding event documents",
    )

    request_timeout: int | None = Field(
        default=None,
        description="Timeout in seconds for engine requests (client default if unset)",
    )

    # =========================================================================
    # Sync
    # =========================================================================

    sync_event_kinds: list[int] = Field(
        default=[0, 1, 30023],
        description="Event kinds copied into the search index",
    )

    # =========================================================================
    # Logging
    # =========================================================================

    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR, CRITICAL",
    )

    log_format: str = Field(
        default="json",
        description=(
            'Logging format: "json" for structured logs, '
            '"console" for human-readable'
        ),
    )

    @field_validator("sync_event_kinds")
    @classmethod
    def _check_kinds(cls, value: list[int]) -> list[int]:
        negative = [kind for kind in value if kind < 0]
        if negative:
            raise ValueError(f"event kinds must be non-negative, got {negative}")
        return value

    @field_validator("log_format")
    @classmethod
    def _check_log_format(cls, value: str) -> str:
        if value not in LOG_FORMATS:
            raise ValueError(
                f"log_format must be one of {list(LOG_FORMATS)}, got {value!r}"
            )
        return value

    @property
    def is_enabled(self) -> bool:
        """Whether both the engine endpoint and credential are configured."""
        return bool(
            self.meilisearch_host
            and self.meilisearch_host.strip()
            and self.meilisearch_api_key
            and self.meilisearch_api_key.strip()
        )
