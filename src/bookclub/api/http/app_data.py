from dataclasses import dataclass, field

from src.bookclub.core.services import DbSessionService


@dataclass
class ApplicationDependencies:
    database_service: DbSessionService
    applied_migrations: list[str] = field(default_factory=list)
