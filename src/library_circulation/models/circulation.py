"""
Circulation model for the library circulation core.

A Circulation records one checkout/return cycle of one copy. A record with no
``returned_at`` means the copy is checked out. Returning a copy never edits a
record in place: ``mark_returned`` builds the replacement record that the
return_book workflow swaps into the state.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .people import Borrower


class Circulation(BaseModel):
    """A checkout of one copy, and its return once it happens."""

    book_id: int = Field(
        ...,
        description="Catalog id of the borrowed copy",
        ge=0,
    )

    borrowed_by: Borrower = Field(
        ...,
        description="Borrower who checked the copy out",
    )

    borrowed_at: datetime = Field(
        ...,
        description="When the copy was checked out",
    )

    returned_at: datetime | None = Field(
        None,
        description="When the copy came back; None while checked out",
    )

    @property
    def is_checked_out(self) -> bool:
        return self.returned_at is None

    @property
    def is_returned(self) -> bool:
        return not self.is_checked_out

    def mark_returned(self, now: datetime) -> "Circulation":
        """
        Build the returned version of this record.

        Args:
            now: Timestamp of the return

        Returns:
            A new Circulation identical to this one except for ``returned_at``
        """
        return self.model_copy(update={"returned_at": now})

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "book_id": 0,
                "borrowed_by": {"name": "Grace"},
                "borrowed_at": "2024-01-15T10:30:00+00:00",
                "returned_at": None,
            }
        },
    )
