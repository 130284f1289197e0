"""
Tests for the CirculationDesk single-writer command processor.

These tests verify that the desk:
1. Reads the clock once per command and stores the resulting state
2. Leaves its state alone when a return is rejected
3. Serializes concurrent checkouts so no copy is handed out twice
4. Logs checkouts, no-ops and rejected returns
"""

import logging
import threading
from datetime import timedelta

import pytest

from library_circulation.config import LibrarySettings
from library_circulation.desk import CirculationDesk
from library_circulation.exceptions import CirculationNotFoundError
from library_circulation.models import Borrower, LibraryState


@pytest.fixture
def desk(clock, settings) -> CirculationDesk:
    return CirculationDesk(clock=clock, settings=settings)


class TestCirculationDesk:
    """Test suite for CirculationDesk commands."""

    def test_starts_empty(self, desk):
        assert desk.state == LibraryState.initial()

    def test_uses_given_state(self, two_copies_state, settings):
        desk = CirculationDesk(state=two_copies_state, settings=settings)
        assert desk.state is two_copies_state

    def test_add_book_stamps_clock_time(self, desk, clock, librarian, ddd_info, t0):
        state = desk.add_book(librarian, ddd_info)

        assert state is desk.state
        assert state.catalog[0].added_at == t0
        assert clock.reads == 1

    def test_checkout_and_return(self, desk, librarian, borrower, ddd_info, t0):
        desk.add_book(librarian, ddd_info)
        desk.checkout_by_isbn(ddd_info.isbn, borrower)

        state = desk.return_book(0, borrower)

        circulation = state.circulations[0]
        assert circulation.borrowed_at == t0 + timedelta(minutes=1)
        assert circulation.returned_at == t0 + timedelta(minutes=2)

    def test_checkout_by_book_id(self, desk, librarian, borrower, ddd_info):
        desk.add_book(librarian, ddd_info)
        desk.add_book(librarian, ddd_info)

        state = desk.checkout_by_book_id(1, borrower)

        assert state.checked_out()[0].book_id == 1

    def test_rejected_return_keeps_state(self, desk, librarian, borrower, ddd_info, caplog):
        desk.add_book(librarian, ddd_info)
        before = desk.state

        with caplog.at_level(logging.WARNING, logger="library_circulation"):
            with pytest.raises(CirculationNotFoundError):
                desk.return_book(0, borrower)

        assert desk.state is before
        assert "not checked out" in caplog.text

    def test_noop_checkout_logged(self, desk, borrower, caplog):
        with caplog.at_level(logging.INFO, logger="library_circulation"):
            state = desk.checkout_by_isbn("missing", borrower)

        assert state.circulations == ()
        assert "nothing available" in caplog.text

    def test_checkout_logged(self, desk, librarian, borrower, ddd_info, caplog):
        desk.add_book(librarian, ddd_info)

        with caplog.at_level(logging.INFO, logger="library_circulation"):
            desk.checkout_by_isbn(ddd_info.isbn, borrower)

        assert "Checked out book 0" in caplog.text

    def test_default_clock_uses_configured_timezone(self, librarian, ddd_info):
        settings = LibrarySettings(_env_file=None, timezone="Europe/London")
        desk = CirculationDesk(settings=settings)

        state = desk.add_book(librarian, ddd_info)

        assert state.catalog[0].added_at.tzinfo == settings.tzinfo

    def test_tracing_can_be_disabled(self, clock, librarian, ddd_info):
        settings = LibrarySettings(_env_file=None, trace_workflows=False)
        desk = CirculationDesk(clock=clock, settings=settings)

        assert desk.add_book(librarian, ddd_info).catalog[0].id == 0

    def test_concurrent_checkouts_never_share_a_copy(self, desk, librarian, ddd_info):
        copies = 5
        for _ in range(copies):
            desk.add_book(librarian, ddd_info)

        barrier = threading.Barrier(copies * 2)

        def borrow(n: int) -> None:
            barrier.wait()
            desk.checkout_by_isbn(ddd_info.isbn, Borrower(name=f"member-{n}"))

        threads = [threading.Thread(target=borrow, args=(n,)) for n in range(copies * 2)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        book_ids = [c.book_id for c in desk.state.checked_out()]
        assert sorted(book_ids) == list(range(copies))
