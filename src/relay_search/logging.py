"""Logging configuration for the search layer using structlog.

Every log line carries the name of the index it concerns, so a relay running
several search layers (or re-pointing one at a new index) can tell their
write failures apart.
"""

import logging
import sys
from typing import Any

import structlog

from relay_search.config import SearchSettings

# Engine client libraries log every HTTP request at INFO.
_CHATTY_LOGGERS = ("httpx", "httpcore", "meilisearch_python_sdk")


def configure_logging(settings: SearchSettings) -> None:
    """Configure structlog from the search settings.

    Args:
        settings: Supplies log_level, log_format and the index name bound to
            every log line
    """
    numeric_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
    )
    # basicConfig leaves the level alone when the host already installed handlers.
    logging.getLogger().setLevel(numeric_level)
    client_level = logging.DEBUG if numeric_level <= logging.DEBUG else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(client_level)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.log_format == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.extend([
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ])

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.bind_contextvars(search_index=settings.index_name)
