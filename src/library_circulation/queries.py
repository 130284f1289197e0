"""
Read-only queries over a LibraryState.

Nothing in the state stores availability; it is derived each time from the
circulation records. A copy is checked out while one of its circulations has
no return timestamp, and available otherwise, including after a return.
"""

from pydantic import BaseModel, Field, field_validator

from .models import Book, Circulation, LibraryState


class BookSearch(BaseModel):
    """
    Criteria for search_catalog.

    Every criterion that is set must match. A search with no criteria
    matches the whole catalog.
    """

    isbn: str | None = Field(
        default=None,
        description="Exact ISBN, compared verbatim",
        examples=["9781680502541"],
    )

    title: str | None = Field(
        default=None,
        description="Title fragment (partial match, case-insensitive)",
        max_length=500,
        examples=["domain modeling"],
    )

    author: str | None = Field(
        default=None,
        description="Author name fragment (partial match, case-insensitive)",
        max_length=200,
        examples=["wlaschin"],
    )

    available_only: bool = Field(
        default=False,
        description="Only return copies that are not checked out",
    )

    @field_validator("title", "author")
    @classmethod
    def strip_whitespace(cls, v: str | None) -> str | None:
        """Strip leading/trailing whitespace; blank criteria are dropped."""
        if v is not None:
            v = v.strip()
            if not v:
                return None
        return v

    @field_validator("isbn")
    @classmethod
    def drop_blank_isbn(cls, v: str | None) -> str | None:
        """A blank ISBN criterion is dropped; others are kept as given."""
        if v is not None and not v.strip():
            return None
        return v

    def matches(self, book: Book) -> bool:
        if self.isbn is not None and book.isbn != self.isbn:
            return False
        if self.title is not None and self.title.lower() not in book.info.title.lower():
            return False
        if self.author is not None:
            needle = self.author.lower()
            if not any(needle in name.lower() for name in book.info.author_names):
                return False
        return True


def checked_out_book_ids(state: LibraryState) -> frozenset[int]:
    return frozenset(c.book_id for c in state.checked_out())


def copies_of(state: LibraryState, isbn: str) -> tuple[Book, ...]:
    """All catalog copies of a title, newest first."""
    return state.books_with_isbn(isbn)


def available_book_ids(state: LibraryState, isbn: str) -> tuple[int, ...]:
    """
    Ids of the copies of ``isbn`` that can be checked out, lowest first.

    The first id is the one checkout_by_isbn would pick.
    """
    checked_out = checked_out_book_ids(state)
    return tuple(sorted({b.id for b in copies_of(state, isbn)} - checked_out))


def is_available(state: LibraryState, book_id: int) -> bool:
    """True when the id is in the catalog and not checked out."""
    in_catalog = any(book.id == book_id for book in state.catalog)
    return in_catalog and book_id not in checked_out_book_ids(state)


def active_circulation(state: LibraryState, book_id: int) -> Circulation | None:
    return next(
        (c for c in state.checked_out() if c.book_id == book_id),
        None,
    )


def circulation_history(state: LibraryState, book_id: int) -> tuple[Circulation, ...]:
    """Every circulation of a copy, most recent checkout first."""
    history = [c for c in state.circulations if c.book_id == book_id]
    return tuple(sorted(history, key=lambda c: c.borrowed_at, reverse=True))


def search_catalog(state: LibraryState, search: BookSearch) -> tuple[Book, ...]:
    """
    Find catalog copies matching the given criteria.

    Args:
        state: Library state to search
        search: Criteria; unset fields are ignored

    Returns:
        Matching copies in catalog order (newest first)
    """
    checked_out = checked_out_book_ids(state) if search.available_only else frozenset()
    return tuple(
        book
        for book in state.catalog
        if search.matches(book) and book.id not in checked_out
    )
