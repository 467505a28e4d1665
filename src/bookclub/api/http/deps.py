"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator

from fastapi import Depends, Request
from sqlmodel import Session

from src.bookclub.api.http.app_data import ApplicationDependencies
from src.bookclub.api.http.controllers.book import BookController
from src.bookclub.core.services import BookInteractor, BookService, DbSessionService
from src.bookclub.entities.service.book import BookRepository, SqlBookRepository


def get_database_service(request: Request) -> DbSessionService:
    """Get the shared database service."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    return app_deps.database_service


def get_db_session(
    database_service: DbSessionService = Depends(get_database_service),
) -> Iterator[Session]:
    """Yield a request-scoped session, closed once the response is sent."""
    session = database_service.get_session()
    try:
        yield session
    finally:
        session.close()


def get_book_repository(session: Session = Depends(get_db_session)) -> BookRepository:
    return SqlBookRepository(session)


def get_book_interactor(
    repository: BookRepository = Depends(get_book_repository),
) -> BookInteractor:
    return BookService(repository)


def get_book_controller(
    interactor: BookInteractor = Depends(get_book_interactor),
) -> BookController:
    return BookController(interactor)
