"""Database initialization script."""

from src.bookclub.core.services import DbSessionService, MigrationRunner
from src.bookclub.runtime.context import get_config


def init_db(migrations_path: str | None = None) -> list[str]:
    """Apply pending migrations and return the names applied by this run."""
    config = get_config()
    database_service = DbSessionService()
    try:
        runner = MigrationRunner(database_service.engine)
        return runner.apply(migrations_path or config.database.migrations_path)
    finally:
        database_service.dispose()


if __name__ == "__main__":
    init_db()
