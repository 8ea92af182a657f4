from sqlalchemy.exc import DBAPIError, SQLAlchemyError


class StoreError(Exception):
    """Base store error class."""

    def __init__(self, detail: str, error_code: str | None = None):
        self.detail = detail
        self.error_code = error_code or "GENERIC_ERROR"
        super().__init__(detail)


class StorageError(StoreError):
    """The database rejected or failed a statement.

    ``error_code`` holds the driver-level code (e.g. ``SQLITE_CONSTRAINT_FOREIGNKEY``)
    when one is available.
    """

    @classmethod
    def from_sqlalchemy(cls, exc: SQLAlchemyError, action: str) -> "StorageError":
        error_code = None
        message = str(exc)
        if isinstance(exc, DBAPIError) and exc.orig is not None:
            error_code = getattr(exc.orig, "sqlite_errorname", None)
            message = str(exc.orig)
        if error_code is None:
            error_code = getattr(exc, "code", None) or "DATABASE_ERROR"
        return cls(f"Database error during {action}: {message}", error_code)


class ActorLinkedError(StoreError):
    """Refused to delete an actor that movies still reference."""

    def __init__(self, actor_id: int, movie_count: int):
        self.actor_id = actor_id
        self.movie_count = movie_count
        super().__init__(
            f"Actor {actor_id} is linked to {movie_count} movie(s) and cannot be deleted",
            "ACTOR_LINKED_TO_MOVIES",
        )
