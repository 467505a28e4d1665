"""Tests for translating interactor outcomes into HTTP responses."""

import pytest

from src.bookclub.api.http.controllers.book import error_response
from src.bookclub.core.errors import (
    NotFoundError,
    OperationNotImplementedError,
    StoreError,
    ValidationError,
)
from src.bookclub.entities.service.book import Book, BookStatus
from tests.fixtures.dummies import InMemoryBookRepository, RaisingBookInteractor

VALID_BODY = {"title": "Dune", "author": "Frank Herbert", "status": "SUGGESTED"}

REQUESTS = [
    ("PUT", "/v1/books", VALID_BODY),
    ("GET", "/v1/books", None),
    ("PATCH", "/v1/books/b1", {"status": "READING"}),
    ("DELETE", "/v1/books/b1", None),
]


class TestErrorResponse:
    @pytest.mark.parametrize(
        ("error", "status_code", "body"),
        [
            (ValidationError("title cannot be empty"), 400, "title cannot be empty"),
            (NotFoundError("book b1 not found"), 404, "Not Found"),
            (OperationNotImplementedError("later"), 501, "Not Implemented"),
            (StoreError("disk I/O error"), 500, "Internal Server Error"),
            (RuntimeError("unexpected"), 500, "Internal Server Error"),
        ],
    )
    def test_maps_error_kinds(self, error: Exception, status_code: int, body: str):
        response = error_response(error, "unable to do the thing")

        assert response.status_code == status_code
        assert response.body.decode() == body


class TestControllerErrorMapping:
    """Every route maps interactor failures the same way."""

    @pytest.mark.parametrize(("method", "url", "body"), REQUESTS)
    def test_store_error_is_opaque(self, client_for, method, url, body):
        client = client_for(RaisingBookInteractor(StoreError("database is locked")))

        response = client.request(method, url, json=body)

        assert response.status_code == 500
        assert response.text == "Internal Server Error"
        assert "locked" not in response.text

    @pytest.mark.parametrize(("method", "url", "body"), REQUESTS)
    def test_not_implemented(self, client_for, method, url, body):
        client = client_for(RaisingBookInteractor(OperationNotImplementedError("not yet")))

        response = client.request(method, url, json=body)

        assert response.status_code == 501
        assert response.text == "Not Implemented"

    @pytest.mark.parametrize(("method", "url", "body"), REQUESTS)
    def test_not_found(self, client_for, method, url, body):
        client = client_for(RaisingBookInteractor(NotFoundError("gone")))

        response = client.request(method, url, json=body)

        assert response.status_code == 404

    def test_validation_message_is_echoed(self, client_for):
        client = client_for(
            RaisingBookInteractor(ValidationError("cannot create book with status COMPLETED"))
        )

        response = client.put("/v1/books", json=VALID_BODY)

        assert response.status_code == 400
        assert response.text == "cannot create book with status COMPLETED"

    def test_request_validation_happens_before_the_interactor(self, client_for):
        client = client_for(RaisingBookInteractor(StoreError("must not be reached")))

        response = client.put("/v1/books", json={**VALID_BODY, "title": ""})

        assert response.status_code == 400
        assert response.text == "title cannot be empty"


class TestControllerWithFakeRepository:
    """Controller flows over the service and an in-memory repository."""

    @pytest.fixture
    def service_client(self, client_for, book_service):
        return client_for(book_service)

    def test_create_assigns_server_id(
        self, service_client, fake_repository: InMemoryBookRepository
    ):
        response = service_client.put("/v1/books", json={**VALID_BODY, "id": "client-id"})

        assert response.status_code == 200
        body = response.json()
        assert body["id"] != "client-id"
        assert body["id"] in fake_repository.books

    def test_update_reads_then_merges(
        self, service_client, fake_repository: InMemoryBookRepository
    ):
        fake_repository.books["b1"] = Book(
            id="b1", title="Dune", author="Frank Herbert", genre="SF",
            published_year=1965, status=BookStatus.SUGGESTED,
        )

        response = service_client.patch("/v1/books/b1", json={"status": "READING"})

        assert response.status_code == 200
        assert response.json() == {
            "id": "b1",
            "title": "Dune",
            "author": "Frank Herbert",
            "genre": "SF",
            "year": 1965,
            "status": "READING",
        }
        assert fake_repository.calls == ["list", "update"]

    def test_update_unknown_book_never_writes(
        self, service_client, fake_repository: InMemoryBookRepository
    ):
        response = service_client.patch("/v1/books/missing", json={"title": "New"})

        assert response.status_code == 404
        assert fake_repository.calls == ["list"]

    def test_invalid_update_never_touches_the_store(
        self, service_client, fake_repository: InMemoryBookRepository
    ):
        response = service_client.patch("/v1/books/b1", json={"status": "FINISHED"})

        assert response.status_code == 400
        assert response.text == "invalid status FINISHED"
        assert fake_repository.calls == []

    def test_read_passes_filters(
        self, service_client, fake_repository: InMemoryBookRepository
    ):
        fake_repository.books["b1"] = Book(
            id="b1", title="Dune", author="Frank Herbert", status=BookStatus.READING
        )
        fake_repository.books["b2"] = Book(
            id="b2", title="Emma", author="Jane Austen", status=BookStatus.SAVED
        )

        response = service_client.get("/v1/books", params={"status": "SAVED"})

        assert response.status_code == 200
        assert [book["id"] for book in response.json()] == ["b2"]
