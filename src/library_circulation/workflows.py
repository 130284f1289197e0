"""
Circulation workflows: the state transitions of the library.

Each workflow is a pure function. It takes the current LibraryState plus the
request parameters, including the caller's notion of "now", and returns the
next LibraryState. Nothing reads a clock or touches shared state here.

Two failure policies coexist:

1. Silent no-op: add_book never fails, and both checkout workflows return
   the input state unchanged when nothing matches or every match is already
   checked out.
2. Hard failure: return_book raises CirculationNotFoundError when the copy
   has no active circulation.

Copy selection takes the lowest available id. That rule is only race-free
with a single writer, which CirculationDesk provides.
"""

from collections.abc import Iterable
from datetime import datetime

from .exceptions import CirculationNotFoundError
from .models import Book, BookInfo, Borrower, Circulation, LibraryState, Librarian


def _next_book_id(state: LibraryState, isbn: str) -> int:
    """Ids count up per ISBN; the first copy of any title gets 0."""
    same_isbn_ids = [book.id for book in state.books_with_isbn(isbn)]
    if not same_isbn_ids:
        return 0
    return max(same_isbn_ids) + 1


def add_book(
    state: LibraryState, librarian: Librarian, now: datetime, info: BookInfo
) -> LibraryState:
    """
    Add one copy of a title to the catalog.

    Args:
        state: Current library state
        librarian: Who is adding the copy
        now: Timestamp recorded as ``added_at``
        info: Bibliographic description of the copy

    Returns:
        A new state whose catalog starts with the new Book
    """
    book = Book(
        id=_next_book_id(state, info.isbn),
        info=info,
        added_by=librarian,
        added_at=now,
    )
    return state.model_copy(update={"catalog": (book, *state.catalog)})


def _checkout_first_available(
    state: LibraryState,
    candidate_ids: Iterable[int],
    borrower: Borrower,
    now: datetime,
) -> LibraryState:
    checked_out_ids = {c.book_id for c in state.checked_out()}
    available_ids = set(candidate_ids) - checked_out_ids
    if not available_ids:
        return state

    circulation = Circulation(
        book_id=min(available_ids),
        borrowed_by=borrower,
        borrowed_at=now,
    )
    return state.model_copy(
        update={"circulations": (circulation, *state.circulations)}
    )


def checkout_by_isbn(
    state: LibraryState, isbn: str, borrower: Borrower, now: datetime
) -> LibraryState:
    """
    Check out any available copy of a title.

    The available copy with the lowest id is chosen. When the ISBN is not in
    the catalog, or every copy is checked out, the input state is returned
    as is.
    """
    candidate_ids = [book.id for book in state.books_with_isbn(isbn)]
    return _checkout_first_available(state, candidate_ids, borrower, now)


def checkout_by_book_id(
    state: LibraryState, book_id: int, borrower: Borrower, now: datetime
) -> LibraryState:
    """
    Check out one specific copy by catalog id.

    Returns the input state as is when no catalog entry has that id or the
    copy is already checked out.
    """
    candidate_ids = [book.id for book in state.catalog if book.id == book_id]
    return _checkout_first_available(state, candidate_ids, borrower, now)


def return_book(
    state: LibraryState, book_id: int, borrower: Borrower, now: datetime
) -> LibraryState:
    """
    Return a checked-out copy.

    The active circulation for ``book_id`` is replaced by a copy with
    ``returned_at`` set to ``now`` and moved to the front. Earlier, already
    returned circulations of the same copy stay in place.

    ``borrower`` is not compared with the circulation's ``borrowed_by``:
    anyone may return a copy.

    Raises:
        CirculationNotFoundError: If the copy is not checked out
    """
    active = next(
        (c for c in state.checked_out() if c.book_id == book_id),
        None,
    )
    if active is None:
        raise CirculationNotFoundError(book_id)

    returned = active.mark_returned(now)
    others = tuple(c for c in state.circulations if c is not active)
    return state.model_copy(update={"circulations": (returned, *others)})
