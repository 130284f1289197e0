"""
Circulation desk: the single writer in front of the pure workflows.

The workflows assume that exactly one caller applies transitions at a time;
otherwise two checkouts could both pick the same "lowest available" copy.
CirculationDesk holds the current LibraryState and applies every command
under one lock, so concurrent callers are serialized.

The desk is also where the clock is read. Each command takes one timestamp
from the injected clock and hands it to the workflow, which keeps the
workflows deterministic and lets tests pin time.
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from . import workflows
from .config import LibrarySettings, get_config
from .exceptions import CirculationNotFoundError
from .models import BookInfo, Borrower, LibraryState, Librarian
from .observability import trace_workflow

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class CirculationDesk:
    """Owns the current library state and serializes every transition."""

    def __init__(
        self,
        state: LibraryState | None = None,
        clock: Clock | None = None,
        settings: LibrarySettings | None = None,
    ):
        self.settings = settings or get_config()
        self._state = state if state is not None else LibraryState.initial()
        self._clock = clock or self._default_clock
        self._lock = threading.Lock()

    def _default_clock(self) -> datetime:
        return datetime.now(self.settings.tzinfo)

    @property
    def state(self) -> LibraryState:
        """Snapshot of the current state; safe to share, since it is immutable."""
        return self._state

    @trace_workflow("add_book")
    def add_book(self, librarian: Librarian, info: BookInfo) -> LibraryState:
        with self._lock:
            self._state = workflows.add_book(self._state, librarian, self._clock(), info)
            book = self._state.catalog[0]
            logger.info(
                "Added copy %s of '%s' (ISBN %s) by %s",
                book.id,
                book.info.title,
                book.info.isbn,
                librarian,
            )
            return self._state

    @trace_workflow("checkout_by_isbn")
    def checkout_by_isbn(self, isbn: str, borrower: Borrower) -> LibraryState:
        with self._lock:
            previous = self._state
            self._state = workflows.checkout_by_isbn(previous, isbn, borrower, self._clock())
            self._log_checkout(previous, f"ISBN {isbn}", borrower)
            return self._state

    @trace_workflow("checkout_by_book_id")
    def checkout_by_book_id(self, book_id: int, borrower: Borrower) -> LibraryState:
        with self._lock:
            previous = self._state
            self._state = workflows.checkout_by_book_id(
                previous, book_id, borrower, self._clock()
            )
            self._log_checkout(previous, f"book {book_id}", borrower)
            return self._state

    @trace_workflow("return_book")
    def return_book(self, book_id: int, borrower: Borrower) -> LibraryState:
        """
        Return a checked-out copy.

        Raises:
            CirculationNotFoundError: If the copy is not checked out; the
                desk keeps its current state
        """
        with self._lock:
            try:
                self._state = workflows.return_book(
                    self._state, book_id, borrower, self._clock()
                )
            except CirculationNotFoundError:
                logger.warning(
                    "Return of book %s by %s rejected: not checked out", book_id, borrower
                )
                raise

            logger.info("Book %s returned by %s", book_id, borrower)
            return self._state

    def _log_checkout(self, previous: LibraryState, target: str, borrower: Borrower) -> None:
        if self._state is previous:
            logger.info("Checkout of %s for %s skipped: nothing available", target, borrower)
            return

        circulation = self._state.circulations[0]
        logger.info(
            "Checked out book %s (%s) to %s", circulation.book_id, target, borrower
        )
        logger.debug("Circulation count now %s", len(self._state.circulations))
