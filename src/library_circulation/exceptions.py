"""Exceptions raised by the library circulation core."""


class LibraryError(Exception):
    """Base exception for library circulation operations."""


class CirculationNotFoundError(LibraryError):
    """Raised when no checked-out circulation exists for a book id."""

    def __init__(self, book_id: int):
        self.book_id = book_id
        super().__init__(f"No checked-out circulation found for book {book_id}")
