"""Entity: Book."""

from enum import StrEnum

from pydantic import BaseModel, Field

from src.bookclub.core.errors import ValidationError


class BookStatus(StrEnum):
    """Where a book stands in the club's reading lifecycle.

    SAVED and SUGGESTED are candidates, READING is accepted, COMPLETED and
    DISCARDED are only reachable by updating an existing book.
    """

    SAVED = "SAVED"
    SUGGESTED = "SUGGESTED"
    READING = "READING"
    DISCARDED = "DISCARDED"
    COMPLETED = "COMPLETED"

    @classmethod
    def parse(cls, value: str) -> "BookStatus":
        """Map the exact wire representation to a status.

        Raises:
            ValidationError: If value is not one of the known statuses.
        """
        try:
            return cls(value)
        except ValueError:
            raise ValidationError(f"invalid status {value}") from None


CREATION_FORBIDDEN_STATUSES = frozenset({BookStatus.COMPLETED, BookStatus.DISCARDED})


class Book(BaseModel):
    """Book entity representing a title tracked by the reading club.

    The id stays empty until the book is created; the repository fills it in.
    """

    id: str | None = Field(default=None, description="Unique identifier")
    title: str = Field(description="Title")
    author: str = Field(description="Author")
    genre: str | None = Field(default=None, description="Genre")
    published_year: int | None = Field(default=None, description="Year of publication")
    status: BookStatus = Field(description="Lifecycle status")


class BookFilters(BaseModel):
    """Exact-match filters for listing books; unset filters match everything."""

    id: str | None = None
    title: str | None = None
    author: str | None = None
    genre: str | None = None
    published_year: int | None = None
    status: BookStatus | None = None
