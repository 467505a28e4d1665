"""Unit tests for the book lifecycle rules."""

import pytest

from src.bookclub.core.errors import NotFoundError, ValidationError
from src.bookclub.core.services import BookService
from src.bookclub.entities.service.book import Book, BookFilters, BookStatus
from tests.fixtures.dummies import InMemoryBookRepository


def _book(status: BookStatus = BookStatus.SUGGESTED, **overrides) -> Book:
    return Book(title="Dune", author="Frank Herbert", status=status, **overrides)


class TestCreateBook:
    @pytest.mark.parametrize(
        "status", [BookStatus.SAVED, BookStatus.SUGGESTED, BookStatus.READING]
    )
    def test_allowed_statuses_are_persisted(
        self, book_service: BookService, fake_repository: InMemoryBookRepository, status
    ):
        created = book_service.create_book(_book(status))

        assert created.id in fake_repository.books
        assert created.status is status

    @pytest.mark.parametrize("status", [BookStatus.COMPLETED, BookStatus.DISCARDED])
    def test_terminal_statuses_are_rejected(
        self, book_service: BookService, fake_repository: InMemoryBookRepository, status
    ):
        with pytest.raises(ValidationError, match=f"cannot create book with status {status.value}"):
            book_service.create_book(_book(status))

        assert fake_repository.books == {}
        assert fake_repository.calls == []

    def test_missing_book_is_rejected(
        self, book_service: BookService, fake_repository: InMemoryBookRepository
    ):
        with pytest.raises(ValidationError, match="empty book info"):
            book_service.create_book(None)

        assert fake_repository.calls == []

    def test_delegates_book_unchanged(
        self, book_service: BookService, fake_repository: InMemoryBookRepository
    ):
        book = _book(id="given-id", genre="Science fiction", published_year=1965)

        created = book_service.create_book(book)

        assert created == book
        assert fake_repository.books["given-id"] == book


class TestReadBooks:
    def test_passes_filters_through(
        self, book_service: BookService, fake_repository: InMemoryBookRepository
    ):
        book_service.create_book(_book(id="b1"))
        book_service.create_book(_book(BookStatus.READING, id="b2"))

        books = book_service.read_books(BookFilters(status=BookStatus.READING))

        assert [book.id for book in books] == ["b2"]

    def test_no_filters_lists_everything(self, book_service: BookService):
        book_service.create_book(_book(id="b1"))

        assert [book.id for book in book_service.read_books()] == ["b1"]


class TestUpdateBook:
    def test_returns_the_input_book(
        self, book_service: BookService, fake_repository: InMemoryBookRepository
    ):
        book_service.create_book(_book(id="b1"))
        changed = _book(BookStatus.COMPLETED, id="b1")

        result = book_service.update_book(changed)

        assert result is changed
        assert fake_repository.books["b1"].status is BookStatus.COMPLETED

    def test_missing_book_is_rejected(
        self, book_service: BookService, fake_repository: InMemoryBookRepository
    ):
        with pytest.raises(ValidationError, match="empty book info"):
            book_service.update_book(None)

        assert fake_repository.calls == []

    def test_repository_validation_propagates(self, book_service: BookService):
        with pytest.raises(ValidationError, match="book id cannot be empty"):
            book_service.update_book(_book())


class TestDeleteBook:
    def test_removes_book(
        self, book_service: BookService, fake_repository: InMemoryBookRepository
    ):
        book_service.create_book(_book(id="b1"))

        book_service.delete_book("b1")

        assert fake_repository.books == {}

    def test_not_found_propagates(self, book_service: BookService):
        with pytest.raises(NotFoundError):
            book_service.delete_book("unknown-id")
