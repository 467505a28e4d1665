"""Core services exports."""

# Book Services
from .book.interactor import BookInteractor, BookService

# Database Services
from .database.db_migrate import MigrationRunner
from .database.db_session import DbSessionService

__all__ = [
    # Book Services
    "BookInteractor",
    "BookService",
    # Database Services
    "DbSessionService",
    "MigrationRunner",
]
