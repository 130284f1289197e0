"""
People referenced by catalog and circulation records.

Authors, librarians and borrowers are identified by name only. Each of them
can be built from a plain string, so ``Librarian.model_validate("Ada")`` and
``Librarian(name="Ada")`` are equivalent, and fields typed with one of these
models accept a bare name.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class NamedParty(BaseModel):
    """Base model for anything identified by a display name."""

    name: str = Field(
        ...,
        description="Display name",
        min_length=1,
        max_length=200,
    )

    @model_validator(mode="before")
    @classmethod
    def accept_bare_name(cls, data: Any) -> Any:
        """Allow a plain string in place of ``{"name": ...}``."""
        if isinstance(data, str):
            return {"name": data}
        return data

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip surrounding whitespace; a blank name is rejected."""
        stripped = v.strip()
        if not stripped:
            raise ValueError("Name cannot be blank")
        return stripped

    def __str__(self) -> str:
        return self.name

    model_config = ConfigDict(frozen=True)


class Author(NamedParty):
    """An author credited on a book."""


class Librarian(NamedParty):
    """The staff member who added a copy to the catalog."""


class Borrower(NamedParty):
    """A library member who checks copies out."""
