"""Shared fixtures for the release calendar tests.

- For schema validation tests: use dict factories from tests.factories
- For GitHub API tests: use the FakeGitHubApi from tests.factories
- For Jira/iCalendar tests: use httpx.MockTransport with tests.fixtures data
"""

from collections.abc import Generator
from datetime import UTC, date, datetime
from typing import Any

import pytest
from loguru import logger

from release_calendar.config import Settings, get_settings


# -----------------------------------------------------------------------------
# Dates used across tests. JUN_20 is "today" wherever overdue status matters.
# -----------------------------------------------------------------------------

# Base dates
JUN_10 = date(2024, 6, 10)
JUN_20 = date(2024, 6, 20)
JUN_21 = date(2024, 6, 21)
JUL_18 = date(2024, 7, 18)

# Milestone due instants (GitHub reports midnight-ish UTC or local 07:00)
JUN_20_DUE = datetime(2024, 6, 20, 7, 0, 0, tzinfo=UTC)

# Milestone due_on values as GitHub serializes them
JUN_10_ISO = "2024-06-10T07:00:00Z"
JUN_20_ISO = "2024-06-20T07:00:00Z"
JUN_20_LATE_ISO = "2024-06-20T23:30:00Z"  # Already Jun 21 in London (BST)
JUL_18_ISO = "2024-07-18T07:00:00Z"


# -----------------------------------------------------------------------------
# Settings Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Ensure every test reads settings afresh."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# -----------------------------------------------------------------------------
# Logging Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def log_records() -> Generator[list[dict[str, Any]], None, None]:
    """Capture loguru records emitted during a test."""
    records: list[dict[str, Any]] = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
