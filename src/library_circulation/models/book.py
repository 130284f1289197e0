"""
Book models for the library circulation core.

BookInfo is the bibliographic description shared by every copy of a title.
Book is one physical copy in the catalog: it pairs a BookInfo with the id the
catalog assigned to it and a record of who added it and when.

Book ids are assigned per ISBN by the add_book workflow, so two books with
different ISBNs may carry the same id.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .people import Author, Librarian


class BookInfo(BaseModel):
    """Bibliographic description of a title."""

    authors: tuple[Author, ...] = Field(
        default=(),
        description="Credited authors, in credit order",
        examples=[["Scott Wlaschin"], ["Harold Abelson", "Gerald Jay Sussman"]],
    )

    title: str = Field(
        ...,
        description="The title of the book",
        min_length=1,
        max_length=500,
        examples=["Domain Modeling Made Functional"],
    )

    isbn: str = Field(
        ...,
        description="International Standard Book Number, compared verbatim",
        min_length=1,
        examples=["9781680502541", "978-0-262-51087-5"],
    )

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Strip surrounding whitespace and reject blank titles."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Title cannot be blank")
        return stripped

    @field_validator("isbn")
    @classmethod
    def reject_blank_isbn(cls, v: str) -> str:
        """Reject whitespace-only ISBNs; anything else is kept as given."""
        if not v.strip():
            raise ValueError("ISBN cannot be blank")
        return v

    @property
    def author_names(self) -> tuple[str, ...]:
        return tuple(author.name for author in self.authors)

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "authors": [{"name": "Scott Wlaschin"}],
                "title": "Domain Modeling Made Functional",
                "isbn": "9781680502541",
            }
        },
    )


class Book(BaseModel):
    """
    One copy of a title in the catalog.

    Books are only created by the add_book workflow and are never changed or
    removed afterwards.
    """

    id: int = Field(
        ...,
        description="Catalog identifier, unique among copies sharing an ISBN",
        ge=0,
    )

    info: BookInfo = Field(
        ...,
        description="Bibliographic description of this copy",
    )

    added_by: Librarian = Field(
        ...,
        description="Librarian who added the copy",
    )

    added_at: datetime = Field(
        ...,
        description="When the copy was added to the catalog",
    )

    @property
    def isbn(self) -> str:
        return self.info.isbn

    model_config = ConfigDict(frozen=True)
