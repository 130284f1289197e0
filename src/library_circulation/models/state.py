"""
Library state, the root aggregate of the circulation core.

Every workflow takes a LibraryState and returns a new one; nothing is ever
updated in place. The catalog and the circulations are tuples ordered newest
first, because workflows prepend new entries.

LibraryState serializes through Pydantic, so whatever persists the state can
use ``model_dump_json()`` and ``LibraryState.model_validate_json()``.
"""

from pydantic import BaseModel, ConfigDict, Field

from .book import Book
from .circulation import Circulation


class LibraryState(BaseModel):
    """Immutable snapshot of the catalog and all circulation records."""

    catalog: tuple[Book, ...] = Field(
        default=(),
        description="Every copy ever added, newest first",
    )

    circulations: tuple[Circulation, ...] = Field(
        default=(),
        description="Checkout records, newest first",
    )

    @classmethod
    def initial(cls) -> "LibraryState":
        """Return an empty library."""
        return cls()

    def checked_out(self) -> tuple[Circulation, ...]:
        """Circulations whose copy has not come back yet."""
        return tuple(c for c in self.circulations if c.is_checked_out)

    def books_with_isbn(self, isbn: str) -> tuple[Book, ...]:
        return tuple(book for book in self.catalog if book.isbn == isbn)

    model_config = ConfigDict(frozen=True)


INITIAL_STATE = LibraryState.initial()
