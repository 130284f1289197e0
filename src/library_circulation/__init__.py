"""
Library Circulation Core.

This package implements the state-transition core of a library circulation
system: adding copies to a catalog, checking copies out and returning them.

Key Components:
- models: Immutable Pydantic models for books, circulations and library state
- workflows: Pure functions that turn one LibraryState into the next
- queries: Read-only views derived from a LibraryState
- desk: Single-writer command processor that owns the current state
- config: Configuration management with Pydantic v2 settings
"""

__version__ = "0.1.0"

from .exceptions import CirculationNotFoundError, LibraryError
from .models import (
    INITIAL_STATE,
    Author,
    Book,
    BookInfo,
    Borrower,
    Circulation,
    LibraryState,
    Librarian,
)
from .workflows import (
    add_book,
    checkout_by_book_id,
    checkout_by_isbn,
    return_book,
)

__all__ = [
    "INITIAL_STATE",
    "Author",
    "Book",
    "BookInfo",
    "Borrower",
    "Circulation",
    "CirculationNotFoundError",
    "LibraryError",
    "LibraryState",
    "Librarian",
    "__version__",
    "add_book",
    "checkout_by_book_id",
    "checkout_by_isbn",
    "return_book",
]
