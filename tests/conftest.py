"""Test configuration and fixtures for the library circulation core.

Fixtures here provide:
1. Fixed timestamps - workflows never read a clock, so tests pin time
2. Sample people and book descriptions
3. Pre-built library states for checkout and return scenarios
4. Isolated configuration - each test starts from default settings
"""

import os
from collections.abc import Generator
from datetime import UTC, datetime, timedelta

import logfire
import pytest

from library_circulation.config import LibrarySettings, reset_config
from library_circulation.models import (
    Author,
    BookInfo,
    Borrower,
    LibraryState,
    Librarian,
)
from library_circulation.workflows import add_book

# === Pytest Configuration ===


def pytest_configure(config):
    """Keep logfire local during tests."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear LIBRARY_CIRCULATION_* variables and the settings singleton."""
    for key in list(os.environ):
        if key.startswith("LIBRARY_CIRCULATION_"):
            monkeypatch.delenv(key)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def settings() -> LibrarySettings:
    return LibrarySettings(_env_file=None)


# === Time Fixtures ===


@pytest.fixture
def t0() -> datetime:
    return datetime(2024, 1, 15, 10, 0, tzinfo=UTC)


@pytest.fixture
def later(t0: datetime):
    """Return a helper producing timestamps a number of hours after t0."""

    def _later(hours: int) -> datetime:
        return t0 + timedelta(hours=hours)

    return _later


class FixedClock:
    """Clock that advances one minute on every read."""

    def __init__(self, start: datetime):
        self.current = start
        self.reads = 0

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        self.reads += 1
        return value


@pytest.fixture
def clock(t0: datetime) -> FixedClock:
    return FixedClock(t0)


# === People and Book Fixtures ===


@pytest.fixture
def librarian() -> Librarian:
    return Librarian(name="Ada")


@pytest.fixture
def borrower() -> Borrower:
    return Borrower(name="Grace")


@pytest.fixture
def other_borrower() -> Borrower:
    return Borrower(name="Linus")


@pytest.fixture
def ddd_info() -> BookInfo:
    return BookInfo(
        authors=(Author(name="Scott Wlaschin"),),
        title="Domain Modeling Made Functional",
        isbn="9781680502541",
    )


@pytest.fixture
def sicp_info() -> BookInfo:
    return BookInfo(
        authors=(Author(name="Harold Abelson"), Author(name="Gerald Jay Sussman")),
        title="Structure and Interpretation of Computer Programs",
        isbn="9780262510875",
    )


# === State Fixtures ===


@pytest.fixture
def empty_state() -> LibraryState:
    return LibraryState.initial()


@pytest.fixture
def two_copies_state(empty_state, librarian, t0, ddd_info) -> LibraryState:
    """Catalog holding copies 0 and 1 of the same title."""
    state = add_book(empty_state, librarian, t0, ddd_info)
    return add_book(state, librarian, t0, ddd_info)
