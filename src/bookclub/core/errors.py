"""Error kinds shared by the repository, interactor and HTTP layers."""


class BookClubError(Exception):
    """Base class for all domain errors raised by the service."""


class ValidationError(BookClubError):
    """Bad, missing or out-of-range input, including unknown statuses."""


class NotFoundError(BookClubError):
    """The targeted book does not exist."""


class StoreError(BookClubError):
    """The store failed: connectivity, constraint violation or query failure."""


class OperationNotImplementedError(BookClubError):
    """The operation is intentionally not available yet."""


class MigrationError(BookClubError):
    """A schema migration could not be applied.

    The underlying exception is always chained as ``__cause__``.
    """

    def __init__(self, message: str, migration: str | None = None) -> None:
        super().__init__(message)
        self.migration = migration
