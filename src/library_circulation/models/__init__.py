"""
Library Circulation Models.

This package contains the immutable Pydantic models shared by every
workflow:

- Author, Librarian, Borrower: the people a record refers to
- BookInfo, Book: catalog entries, one Book per physical copy
- Circulation: one checkout/return cycle for one copy
- LibraryState: the root aggregate passed into and out of each workflow
"""

from .book import Book, BookInfo
from .circulation import Circulation
from .people import Author, Borrower, Librarian
from .state import INITIAL_STATE, LibraryState

__all__ = [
    "INITIAL_STATE",
    "Author",
    "Book",
    "BookInfo",
    "Borrower",
    "Circulation",
    "LibraryState",
    "Librarian",
]
