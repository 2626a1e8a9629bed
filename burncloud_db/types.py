"""Query-side value types shared with repository implementations."""

from __future__ import annotations

import re
import uuid
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")


class OrderDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


class QueryOptions(BaseModel):
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    order_by: str | None = None
    order_direction: OrderDirection | None = None

    def to_sql_suffix(self) -> str:
        """Render the ORDER BY / LIMIT / OFFSET tail for a SELECT.

        ``order_by`` is interpolated, so it must be a bare (optionally
        table-qualified) identifier.
        """
        parts: list[str] = []
        if self.order_by:
            if not _IDENTIFIER.match(self.order_by):
                raise ValueError(f"Invalid order_by column: {self.order_by!r}")
            clause = f"ORDER BY {self.order_by}"
            if self.order_direction:
                clause += f" {self.order_direction.value}"
            parts.append(clause)
        if self.limit is not None:
            parts.append(f"LIMIT {self.limit}")
        if self.offset is not None:
            if self.limit is None:
                # SQLite only accepts OFFSET after a LIMIT
                parts.append("LIMIT -1")
            parts.append(f"OFFSET {self.offset}")
        return " ".join(parts)


class DatabaseType(str, Enum):
    POSTGRES = "postgres"
    MYSQL = "mysql"
    SQLITE = "sqlite"
    MONGODB = "mongodb"


class DatabaseConfig(BaseModel):
    """Connection description for a server-backed database."""

    database_type: DatabaseType
    host: str
    port: int = Field(ge=0, le=65535)
    database: str
    username: str
    password: str
    pool_size: int | None = None
    timeout: int | None = None
    ssl: bool | None = None


class QueryContext(BaseModel):
    user_id: uuid.UUID | None = None
    request_id: uuid.UUID | None = Field(default_factory=uuid.uuid4)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: dict[str, str] = Field(default_factory=dict)


class QueryResult(BaseModel):
    rows: list[dict[str, Any]] = Field(default_factory=list)
    rows_affected: int = 0
    last_insert_id: str | None = None


class MigrationInfo(BaseModel):
    version: str
    name: str
    applied_at: datetime
    checksum: str
