"""Request and response payloads for the book endpoints."""

from datetime import date
from typing import TypeVar

from pydantic import BaseModel, StrictInt
from pydantic import ValidationError as PydanticValidationError

from src.bookclub.core.errors import ValidationError
from src.bookclub.entities.service.book import Book, BookFilters, BookStatus

PayloadT = TypeVar("PayloadT", bound=BaseModel)


def current_year() -> int:
    return date.today().year


def decode_payload(model: type[PayloadT], body: bytes) -> PayloadT:
    """Parse a JSON body into model.

    Raises:
        ValidationError: If the body is not JSON or does not match the model.
    """
    try:
        return model.model_validate_json(body)
    except PydanticValidationError as e:
        raise ValidationError("invalid request body") from e


def _require_text(field: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{field} cannot be empty")
    return value


def _check_year(year: int | None) -> None:
    this_year = current_year()
    if year is not None and year > this_year:
        raise ValidationError(f"year cannot be greater than {this_year}")


def _parse_status(status: str | None) -> BookStatus:
    if status is None or status == "":
        raise ValidationError("status cannot be empty")
    return BookStatus.parse(status)


class CreateBookRequest(BaseModel):
    """Payload of PUT /v1/books."""

    title: str | None = None
    author: str | None = None
    genre: str | None = None
    year: StrictInt | None = None
    status: str | None = None

    def to_entity(self, book_id: str) -> Book:
        """Validate every field and build the book to create.

        Raises:
            ValidationError: With the message of the first failing rule.
        """
        title = _require_text("title", self.title)
        author = _require_text("author", self.author)
        if self.genre is not None:
            _require_text("genre", self.genre)
        _check_year(self.year)
        status = _parse_status(self.status)

        return Book(
            id=book_id,
            title=title,
            author=author,
            genre=self.genre,
            published_year=self.year,
            status=status,
        )


class UpdateBookRequest(BaseModel):
    """Payload of PATCH /v1/books/{id}; a null or missing field is left unchanged."""

    title: str | None = None
    author: str | None = None
    genre: str | None = None
    year: StrictInt | None = None
    status: str | None = None

    def changes(self) -> dict:
        """Validate the present fields and return them keyed by entity attribute."""
        changes: dict = {}
        if self.title is not None:
            changes["title"] = _require_text("title", self.title)
        if self.author is not None:
            changes["author"] = _require_text("author", self.author)
        if self.genre is not None:
            changes["genre"] = _require_text("genre", self.genre)
        if self.year is not None:
            _check_year(self.year)
            changes["published_year"] = self.year
        if self.status is not None:
            changes["status"] = _parse_status(self.status)
        return changes


class BookQuery(BaseModel):
    """Query string of GET /v1/books."""

    id: str | None = None
    title: str | None = None
    author: str | None = None
    genre: str | None = None
    year: int | None = None
    status: str | None = None

    def to_filters(self) -> BookFilters:
        return BookFilters(
            id=self.id,
            title=self.title,
            author=self.author,
            genre=self.genre,
            published_year=self.year,
            status=BookStatus.parse(self.status) if self.status is not None else None,
        )


class BookResponse(BaseModel):
    id: str
    title: str
    author: str
    genre: str | None = None
    year: int | None = None
    status: BookStatus

    @classmethod
    def from_entity(cls, book: Book) -> "BookResponse":
        return cls(
            id=book.id or "",
            title=book.title,
            author=book.author,
            genre=book.genre,
            year=book.published_year,
            status=book.status,
        )
