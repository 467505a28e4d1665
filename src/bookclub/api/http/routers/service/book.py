"""Book API router binding methods and paths to the controller."""

from fastapi import APIRouter, Depends, Request
from starlette.responses import Response

from src.bookclub.api.http.controllers.book import BookController
from src.bookclub.api.http.deps import get_book_controller

router = APIRouter(prefix="/books", tags=["books"])


@router.put("", response_class=Response)
async def create_book(
    request: Request,
    controller: BookController = Depends(get_book_controller),
) -> Response:
    """Create a new book."""
    return await controller.create(request)


@router.get("", response_class=Response)
async def read_books(
    request: Request,
    controller: BookController = Depends(get_book_controller),
) -> Response:
    """List books, filtered by the query string."""
    return await controller.read(request)


@router.patch("/{book_id}", response_class=Response)
async def update_book(
    book_id: str,
    request: Request,
    controller: BookController = Depends(get_book_controller),
) -> Response:
    """Update some fields of a book."""
    return await controller.update(request, book_id)


@router.delete("/{book_id}", response_class=Response)
async def delete_book(
    book_id: str,
    controller: BookController = Depends(get_book_controller),
) -> Response:
    """Delete a book."""
    return await controller.delete(book_id)
