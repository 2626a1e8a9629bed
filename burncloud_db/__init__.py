"""BurnCloud database core — SQLite lifecycle wrapper, default paths, records."""

from burncloud_db.db import (
    MEMORY_SENTINEL,
    Database,
    DatabaseConnection,
    ExecuteResult,
    create_database,
    create_default_database,
    create_in_memory_database,
)
from burncloud_db.errors import (
    DatabaseClosedError,
    DatabaseConnectionError,
    DatabaseError,
    DirectoryCreationError,
    NotInitializedError,
    PathResolutionError,
    QueryError,
    RowNotFoundError,
    SerializationError,
)
from burncloud_db.paths import default_database_path, ensure_parent_dir

__version__ = "0.1.0"

__all__ = [
    "MEMORY_SENTINEL",
    "Database",
    "DatabaseClosedError",
    "DatabaseConnection",
    "DatabaseConnectionError",
    "DatabaseError",
    "DirectoryCreationError",
    "ExecuteResult",
    "NotInitializedError",
    "PathResolutionError",
    "QueryError",
    "RowNotFoundError",
    "SerializationError",
    "create_database",
    "create_default_database",
    "create_in_memory_database",
    "default_database_path",
    "ensure_parent_dir",
]
