"""Unit tests for the database engine and session service."""

from pathlib import Path

import pytest
from sqlalchemy import Engine, StaticPool
from sqlmodel import Session, create_engine, select

from src.bookclub.core.services import DbSessionService
from src.bookclub.core.services.database.db_session import build_engine
from src.bookclub.entities.service.book import BookTable
from src.bookclub.runtime.config.config_data import DatabaseConfig


def _row(book_id: str) -> BookTable:
    return BookTable(id=book_id, title="Dune", author="Frank Herbert", status="SAVED")


def _stored_ids(engine: Engine) -> list[str]:
    with Session(engine) as session:
        return [row.id for row in session.exec(select(BookTable))]


class TestBuildEngine:
    def test_memory_database_shares_one_connection(self):
        engine = build_engine(DatabaseConfig(url="sqlite:///:memory:"))
        try:
            assert isinstance(engine.pool, StaticPool)
        finally:
            engine.dispose()

    def test_file_database_creates_parent_directory(self, tmp_path: Path):
        db_path = tmp_path / "nested" / "books.db"

        engine = build_engine(DatabaseConfig(url=f"sqlite:///{db_path}"))
        try:
            assert db_path.parent.is_dir()
            assert not isinstance(engine.pool, StaticPool)
        finally:
            engine.dispose()


class TestSessionScope:
    def test_commits_on_success(self, migrated_engine: Engine):
        service = DbSessionService(engine=migrated_engine)

        with service.session_scope() as session:
            session.add(_row("b1"))

        assert _stored_ids(migrated_engine) == ["b1"]

    def test_rolls_back_and_reraises_on_error(self, migrated_engine: Engine):
        service = DbSessionService(engine=migrated_engine)

        with pytest.raises(RuntimeError, match="boom"):
            with service.session_scope() as session:
                session.add(_row("b1"))
                session.flush()
                raise RuntimeError("boom")

        assert _stored_ids(migrated_engine) == []

    def test_sessions_keep_loaded_attributes_after_commit(self, migrated_engine: Engine):
        service = DbSessionService(engine=migrated_engine)
        row = _row("b1")

        with service.session_scope() as session:
            session.add(row)

        assert row.title == "Dune"


class TestHealthCheck:
    def test_reachable_database(self, engine: Engine):
        assert DbSessionService(engine=engine).health_check() is True

    def test_unreachable_database(self, tmp_path: Path):
        engine = create_engine(f"sqlite:///{tmp_path / 'missing' / 'books.db'}")
        try:
            assert DbSessionService(engine=engine).health_check() is False
        finally:
            engine.dispose()
