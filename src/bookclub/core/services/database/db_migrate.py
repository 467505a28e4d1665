"""Forward-only SQL migrations applied exactly once, tracked by name."""

import os
import sqlite3
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import sqlalchemy as sa
from loguru import logger
from sqlalchemy import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Field, SQLModel

from src.bookclub.core.errors import MigrationError

MIGRATION_SUFFIX = ".sql"


class AppliedMigration(SQLModel, table=True):
    """Bookkeeping row for a migration that has been applied."""

    __tablename__ = "migrations"

    name: str = Field(primary_key=True)
    applied_at: datetime | None = Field(
        default=None,
        sa_column_kwargs={"server_default": sa.func.now()},
    )


@dataclass(frozen=True)
class MigrationScript:
    name: str
    path: Path


def split_sqlite_script(script: str) -> list[str]:
    """Split a script into the statements sqlite3 will accept one at a time.

    A chunk is only cut at a semicolon that completes a statement, so
    semicolons inside string literals and trigger bodies stay put.
    """
    statements: list[str] = []
    buffer = ""
    *terminated, tail = script.split(";")
    for part in terminated:
        buffer += part + ";"
        if sqlite3.complete_statement(buffer):
            if buffer.strip(" \t\r\n;"):
                statements.append(buffer.strip())
            buffer = ""

    leftover = (buffer + tail).strip()
    if leftover.strip(" \t\r\n;"):
        statements.append(leftover)
    return statements


def discover_migrations(migrations_path: str | Path) -> list[MigrationScript]:
    """Find every .sql file under migrations_path, sorted by name.

    The name is the POSIX path relative to migrations_path, which is the plain
    file name for top-level scripts.

    Raises:
        OSError: If the directory cannot be walked.
    """
    root = Path(migrations_path)

    def _raise(error: OSError) -> None:
        raise error

    scripts = []
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise):
        for filename in filenames:
            if not filename.endswith(MIGRATION_SUFFIX):
                continue
            path = Path(dirpath) / filename
            scripts.append(MigrationScript(name=path.relative_to(root).as_posix(), path=path))

    return sorted(scripts, key=lambda script: script.name)


class MigrationRunner:
    """Apply pending migrations from a directory to the store behind engine."""

    def __init__(self, engine: Engine):
        self._engine = engine

    def ensure_bookkeeping_table(self) -> None:
        with self._engine.begin() as conn:
            AppliedMigration.__table__.create(conn, checkfirst=True)  # type: ignore[attr-defined]

    def applied_migrations(self) -> set[str]:
        """Names of the migrations already recorded as applied."""
        with self._engine.connect() as conn:
            return set(conn.execute(sa.select(AppliedMigration.name)).scalars())

    def _execute_script(self, conn: Connection, content: str) -> None:
        if self._engine.dialect.name == "sqlite":
            for statement in split_sqlite_script(content):
                conn.exec_driver_sql(statement)
        else:
            conn.exec_driver_sql(content)

    def _apply_one(self, script: MigrationScript) -> None:
        try:
            content = script.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.bind(filename=script.name).error("failed to read migration file: {}", e)
            raise MigrationError(
                f"failed to read migration {script.name}", migration=script.name
            ) from e

        logger.bind(filename=script.name).info("applying migration")
        try:
            # engine.begin() rolls back if anything below raises
            with self._engine.begin() as conn:
                self._execute_script(conn, content)
                conn.execute(sa.insert(AppliedMigration).values(name=script.name))
        except SQLAlchemyError as e:
            logger.bind(filename=script.name).error("failed to apply migration: {}", e)
            raise MigrationError(
                f"failed to apply migration {script.name}", migration=script.name
            ) from e

        logger.bind(filename=script.name).info("migration completed")

    def apply(self, migrations_path: str | Path) -> list[str]:
        """Apply every pending migration in lexicographic order.

        Stops at the first failure; later scripts are not attempted.

        Returns:
            The names applied by this run, empty when already up to date.

        Raises:
            MigrationError: With the underlying exception as ``__cause__``.
        """
        try:
            self.ensure_bookkeeping_table()
            applied = self.applied_migrations()
        except SQLAlchemyError as e:
            logger.error("failed to read applied migrations: {}", e)
            raise MigrationError("failed to read applied migrations") from e

        try:
            scripts = discover_migrations(migrations_path)
        except OSError as e:
            logger.bind(path=str(migrations_path)).error("failed to walk migration folder: {}", e)
            raise MigrationError(f"failed to walk migration folder {migrations_path}") from e

        newly_applied = []
        for script in scripts:
            if script.name in applied:
                continue
            self._apply_one(script)
            newly_applied.append(script.name)

        logger.info("all migrations were applied successfully ({} new)", len(newly_applied))
        return newly_applied
