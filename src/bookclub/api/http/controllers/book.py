"""HTTP boundary for books: decode, validate, call the interactor, encode."""

import uuid
from http import HTTPStatus

from fastapi import Request
from loguru import logger
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool
from starlette.responses import JSONResponse, PlainTextResponse, Response

from src.bookclub.api.http.schemas.book import (
    BookQuery,
    BookResponse,
    CreateBookRequest,
    UpdateBookRequest,
    decode_payload,
)
from src.bookclub.core.errors import (
    NotFoundError,
    OperationNotImplementedError,
    ValidationError,
)
from src.bookclub.core.services import BookInteractor
from src.bookclub.entities.service.book import Book, BookFilters


def _status_text(status: HTTPStatus) -> PlainTextResponse:
    return PlainTextResponse(status.phrase, status_code=status.value)


def error_response(error: Exception, action: str) -> Response:
    """Log the cause of a failed action and translate it to a status code.

    Validation failures echo their message; everything else answers with the
    bare status text so store details never reach the caller.
    """
    if isinstance(error, ValidationError):
        logger.bind(error=str(error)).warning("invalid request: {}", action)
        return PlainTextResponse(str(error), status_code=HTTPStatus.BAD_REQUEST.value)
    if isinstance(error, NotFoundError):
        logger.bind(error=str(error)).warning("{}: not found", action)
        return _status_text(HTTPStatus.NOT_FOUND)
    if isinstance(error, OperationNotImplementedError):
        logger.bind(error=str(error)).warning("{}: not implemented", action)
        return _status_text(HTTPStatus.NOT_IMPLEMENTED)

    logger.opt(exception=error).error("{}", action)
    return _status_text(HTTPStatus.INTERNAL_SERVER_ERROR)


def _book_json(book: Book) -> dict:
    return BookResponse.from_entity(book).model_dump(mode="json")


class BookController:
    """Handles the create, read, update and delete requests for books."""

    def __init__(self, interactor: BookInteractor):
        self._interactor = interactor

    async def create(self, request: Request) -> Response:
        try:
            payload = decode_payload(CreateBookRequest, await request.body())
            book = payload.to_entity(str(uuid.uuid4()))
            created = await run_in_threadpool(self._interactor.create_book, book)
        except Exception as e:
            return error_response(e, "unable to create book")

        logger.bind(id=created.id).info("book created")
        return JSONResponse(_book_json(created))

    async def read(self, request: Request) -> Response:
        try:
            try:
                query = BookQuery.model_validate(dict(request.query_params))
            except PydanticValidationError as e:
                raise ValidationError("invalid query parameters") from e
            books = await run_in_threadpool(self._interactor.read_books, query.to_filters())
        except Exception as e:
            return error_response(e, "unable to read books")

        return JSONResponse([_book_json(book) for book in books])

    def _update(self, book_id: str, changes: dict) -> Book:
        matches = self._interactor.read_books(BookFilters(id=book_id))
        if not matches:
            raise NotFoundError(f"book {book_id} not found")
        return self._interactor.update_book(matches[0].model_copy(update=changes))

    async def update(self, request: Request, book_id: str) -> Response:
        try:
            payload = decode_payload(UpdateBookRequest, await request.body())
            # Validate before touching the store
            changes = payload.changes()
            updated = await run_in_threadpool(self._update, book_id, changes)
        except Exception as e:
            return error_response(e, "unable to update book")

        logger.bind(id=book_id, fields=sorted(changes)).info("book updated")
        return JSONResponse(_book_json(updated))

    async def delete(self, book_id: str) -> Response:
        try:
            await run_in_threadpool(self._interactor.delete_book, book_id)
        except Exception as e:
            return error_response(e, "unable to delete book")

        logger.bind(id=book_id).info("book deleted")
        return Response(status_code=HTTPStatus.NO_CONTENT.value)
