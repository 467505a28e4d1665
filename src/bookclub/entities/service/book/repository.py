"""Book repository for data access operations."""

import uuid
from abc import ABC, abstractmethod

from loguru import logger
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from src.bookclub.core.errors import NotFoundError, StoreError, ValidationError

from .entity import Book, BookFilters, BookStatus
from .table import BookTable


class BookRepository(ABC):
    """Persistence contract for books."""

    @abstractmethod
    def create(self, book: Book) -> Book:
        """Insert book, generating its id when it has none.

        Returns:
            The stored book with its id populated.
        """
        raise NotImplementedError

    @abstractmethod
    def list(self, filters: BookFilters | None = None) -> list[Book]:
        """Return every book matching the filters, an empty list when none do."""
        raise NotImplementedError

    @abstractmethod
    def update(self, book: Book) -> None:
        """Overwrite every field but the id of the book with book.id.

        A missing row is left alone; it is not an error here.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, book_id: str) -> None:
        """Remove the book with book_id.

        Raises:
            NotFoundError: If no book has that id.
        """
        raise NotImplementedError


def _to_entity(row: BookTable) -> Book:
    return Book(
        id=row.id,
        title=row.title,
        author=row.author,
        genre=row.genre,
        published_year=row.published_year,
        status=BookStatus(row.status),
    )


class SqlBookRepository(BookRepository):
    """Repository for Book entity operations backed by a SQLModel session."""

    def __init__(self, session: Session):
        self.session = session

    def _fail(self, message: str, error: SQLAlchemyError, **context) -> StoreError:
        self.session.rollback()
        logger.bind(**context).error("{}: {}", message, error)
        return StoreError(message)

    def create(self, book: Book) -> Book:
        if not book.id:
            book.id = str(uuid.uuid4())

        row = BookTable(
            id=book.id,
            title=book.title,
            author=book.author,
            genre=book.genre,
            published_year=book.published_year,
            status=book.status.value,
        )
        try:
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("failed to insert new record", e, id=book.id) from e

        return book

    def list(self, filters: BookFilters | None = None) -> list[Book]:
        statement = select(BookTable)
        if filters is not None:
            if filters.id is not None:
                statement = statement.where(BookTable.id == filters.id)
            if filters.title is not None:
                statement = statement.where(BookTable.title == filters.title)
            if filters.author is not None:
                statement = statement.where(BookTable.author == filters.author)
            if filters.genre is not None:
                statement = statement.where(BookTable.genre == filters.genre)
            if filters.published_year is not None:
                statement = statement.where(BookTable.published_year == filters.published_year)
            if filters.status is not None:
                statement = statement.where(BookTable.status == filters.status.value)
        statement = statement.order_by(BookTable.title, BookTable.id)

        try:
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise self._fail("failed to list books", e) from e

        return [_to_entity(row) for row in rows]

    def update(self, book: Book) -> None:
        if not book.id:
            raise ValidationError("book id cannot be empty")

        try:
            row = self.session.get(BookTable, book.id)
            if row is None:
                logger.bind(id=book.id).info("no book to update")
                return

            row.title = book.title
            row.author = book.author
            row.genre = book.genre
            row.published_year = book.published_year
            row.status = book.status.value
            self.session.add(row)
            self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("failed to update book", e, id=book.id) from e

    def delete(self, book_id: str) -> None:
        try:
            row = self.session.get(BookTable, book_id)
            if row is not None:
                self.session.delete(row)
                self.session.commit()
        except SQLAlchemyError as e:
            raise self._fail("failed to delete book", e, id=book_id) from e

        if row is None:
            logger.bind(id=book_id).warning("no rows affected")
            raise NotFoundError(f"book {book_id} not found")
