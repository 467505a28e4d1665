"""Business rules for the book lifecycle, independent of HTTP and storage."""

from abc import ABC, abstractmethod

from loguru import logger

from src.bookclub.core.errors import ValidationError
from src.bookclub.entities.service.book import (
    CREATION_FORBIDDEN_STATUSES,
    Book,
    BookFilters,
    BookRepository,
)


class BookInteractor(ABC):
    @abstractmethod
    def create_book(self, book: Book | None) -> Book:
        """
        Create a new book and persist it.

        Raises:
            ValidationError: If book is missing or starts in a terminal status
        """
        raise NotImplementedError

    @abstractmethod
    def read_books(self, filters: BookFilters | None = None) -> list[Book]:
        """Return the books matching filters."""
        raise NotImplementedError

    @abstractmethod
    def update_book(self, book: Book | None) -> Book:
        """
        Update the information of an existing book.

        Raises:
            ValidationError: If book is missing
        """
        raise NotImplementedError

    @abstractmethod
    def delete_book(self, book_id: str) -> None:
        """
        Remove a book by its id.

        Raises:
            NotFoundError: If no book has that id
        """
        raise NotImplementedError


class BookService(BookInteractor):
    def __init__(self, repository: BookRepository) -> None:
        self._repository = repository

    def create_book(self, book: Book | None) -> Book:
        if book is None:
            raise ValidationError("empty book info")
        if book.status in CREATION_FORBIDDEN_STATUSES:
            logger.bind(status=book.status.value).info("rejected book creation")
            raise ValidationError(f"cannot create book with status {book.status.value}")
        return self._repository.create(book)

    def read_books(self, filters: BookFilters | None = None) -> list[Book]:
        return self._repository.list(filters)

    def update_book(self, book: Book | None) -> Book:
        if book is None:
            raise ValidationError("empty book info")
        self._repository.update(book)
        return book

    def delete_book(self, book_id: str) -> None:
        self._repository.delete(book_id)
