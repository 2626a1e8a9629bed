"""Capability interfaces for storage built on top of ``Database``.

Only the shapes are declared here. Implementations take a ``Database`` (or any
``QueryExecutor``) in their constructor rather than subclassing anything.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from burncloud_db.types import MigrationInfo, QueryContext, QueryOptions, QueryResult

T = TypeVar("T")


@runtime_checkable
class ConnectionLifecycle(Protocol):
    async def initialize(self) -> None: ...

    async def close(self) -> None: ...

    @property
    def is_initialized(self) -> bool: ...


@runtime_checkable
class QueryExecutor(Protocol):
    """The generic execute/fetch surface ``Database`` exposes."""

    async def execute(self, sql: str, params: Sequence[Any] | Mapping[str, Any] | None = None) -> Any: ...

    async def fetch_one(self, sql: str, params: Any = None, as_: Any = None) -> Any: ...

    async def fetch_optional(self, sql: str, params: Any = None, as_: Any = None) -> Any: ...

    async def fetch_all(self, sql: str, params: Any = None, as_: Any = None) -> list[Any]: ...


class Transaction(Protocol):
    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def execute(self, sql: str, params: Sequence[Any] | None = None) -> QueryResult: ...


class TransactionManager(Protocol):
    async def begin_transaction(self, context: QueryContext) -> Transaction: ...


class Repository(Protocol, Generic[T]):
    """CRUD over one entity type, keyed by string id."""

    async def find_by_id(self, id: str, context: QueryContext) -> T | None: ...

    async def find_all(self, options: QueryOptions, context: QueryContext) -> list[T]: ...

    async def create(self, entity: T, context: QueryContext) -> str: ...

    async def update(self, id: str, entity: T, context: QueryContext) -> None: ...

    async def delete(self, id: str, context: QueryContext) -> None: ...

    async def exists(self, id: str, context: QueryContext) -> bool: ...


class MigrationManager(Protocol):
    async def run_migrations(self) -> None: ...

    async def rollback_migration(self, version: str) -> None: ...

    async def get_migration_status(self) -> list[MigrationInfo]: ...
