"""Tests for logging configuration."""

import logging
from collections.abc import Iterator

import pytest
import structlog

from relay_search.config import SearchSettings
from relay_search.logging import configure_logging


@pytest.fixture(autouse=True)
def isolated_logging() -> Iterator[None]:
    """Restore logger levels and structlog state after each test."""
    names = ("", "httpx", "httpcore", "meilisearch_python_sdk")
    levels = {name: logging.getLogger(name).level for name in names}
    yield
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


@pytest.mark.parametrize(
    ("log_format", "renderer"),
    [
        ("json", structlog.processors.JSONRenderer),
        ("console", structlog.dev.ConsoleRenderer),
    ],
)
def test_renderer_follows_log_format(log_format: str, renderer: type) -> None:
    configure_logging(SearchSettings(log_format=log_format))

    processors = structlog.get_config()["processors"]
    assert isinstance(processors[-1], renderer)


def test_log_level_applied_to_root_logger() -> None:
    configure_logging(SearchSettings(log_level="warning"))

    assert logging.getLogger().level == logging.WARNING


def test_engine_client_loggers_quieted_unless_debug() -> None:
    configure_logging(SearchSettings(log_level="INFO"))
    assert logging.getLogger("httpx").level == logging.WARNING

    configure_logging(SearchSettings(log_level="DEBUG"))
    assert logging.getLogger("httpx").level == logging.DEBUG


def test_json_lines_carry_index_name(caplog: pytest.LogCaptureFixture) -> None:
    configure_logging(SearchSettings(index_name="notes", log_format="json"))

    structlog.get_logger("relay_search.repository").error(
        "event_search.add_failed", event_id="abc"
    )

    line = caplog.records[-1].getMessage()
    assert '"event": "event_search.add_failed"' in line
    assert '"event_id": "abc"' in line
    assert '"search_index": "notes"' in line


def test_lines_below_level_are_dropped(caplog: pytest.LogCaptureFixture) -> None:
    configure_logging(SearchSettings(log_level="ERROR"))

    structlog.get_logger("relay_search.repository").info("event_search.bootstrapped")

    assert "event_search.bootstrapped" not in caplog.text
