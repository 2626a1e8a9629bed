"""Database layer — pooled async SQLite behind a lifecycle wrapper."""

from burncloud_db.db.connection import (
    MEMORY_SENTINEL,
    Database,
    DatabaseConnection,
    ExecuteResult,
    create_database,
    create_default_database,
    create_in_memory_database,
)

__all__ = [
    "MEMORY_SENTINEL",
    "Database",
    "DatabaseConnection",
    "ExecuteResult",
    "create_database",
    "create_default_database",
    "create_in_memory_database",
]
