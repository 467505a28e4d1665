"""Entity package: Book."""

from .entity import CREATION_FORBIDDEN_STATUSES, Book, BookFilters, BookStatus
from .repository import BookRepository, SqlBookRepository
from .table import BookTable

__all__ = [
    "Book",
    "BookFilters",
    "BookStatus",
    "CREATION_FORBIDDEN_STATUSES",
    "BookRepository",
    "SqlBookRepository",
    "BookTable",
]
