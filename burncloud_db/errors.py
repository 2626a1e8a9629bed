"""Exception hierarchy for the database layer."""

from __future__ import annotations


class DatabaseError(Exception):
    """Base class for every error raised by burncloud_db."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class DatabaseConnectionError(DatabaseError):
    """The engine could not open (or verify) a connection pool."""

    def __init__(self, cause: BaseException | str):
        detail = cause if isinstance(cause, str) else str(cause)
        super().__init__(
            f"Connection failed: {detail}",
            cause if isinstance(cause, BaseException) else None,
        )


class NotInitializedError(DatabaseError):
    def __init__(self, message: str = "Database not initialized"):
        super().__init__(message)


class DatabaseClosedError(NotInitializedError):
    def __init__(self) -> None:
        super().__init__("Database has been closed")


class PathResolutionError(DatabaseError):
    def __init__(self, detail: str):
        super().__init__(f"Failed to resolve default database path: {detail}")
        self.detail = detail


class DirectoryCreationError(DatabaseError):
    def __init__(self, detail: str, cause: BaseException | None = None):
        super().__init__(f"Failed to create database directory: {detail}", cause)
        self.detail = detail


class QueryError(DatabaseError):
    """SQL execution failed (syntax error, constraint violation, missing table)."""

    def __init__(self, cause: BaseException | str):
        detail = cause if isinstance(cause, str) else str(cause)
        super().__init__(
            f"Query execution failed: {detail}",
            cause if isinstance(cause, BaseException) else None,
        )


class RowNotFoundError(QueryError):
    def __init__(self) -> None:
        super().__init__("Query returned no rows")


class SerializationError(DatabaseError):
    def __init__(self, detail: str, cause: BaseException | None = None):
        super().__init__(f"Serialization error: {detail}", cause)
        self.detail = detail
