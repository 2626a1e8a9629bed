"""Database connection management — pooled async SQLite."""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import AsyncIterator, Mapping, Sequence
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar

from sqlalchemy import event
from sqlalchemy.engine import URL, RowMapping
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncEngine, create_async_engine
from sqlalchemy.pool import AsyncAdaptedQueuePool, StaticPool

from burncloud_db.config import DatabaseSettings
from burncloud_db.errors import (
    DatabaseClosedError,
    DatabaseConnectionError,
    NotInitializedError,
    QueryError,
    RowNotFoundError,
    SerializationError,
)
from burncloud_db.paths import Environment, default_database_path, ensure_parent_dir

logger = logging.getLogger(__name__)

T = TypeVar("T")

MEMORY_SENTINEL = ":memory:"
SQLITE_DRIVER = "sqlite+aiosqlite"

Params = Sequence[Any] | Mapping[str, Any] | None


@dataclass(frozen=True)
class ExecuteResult:
    rows_affected: int
    last_insert_id: int | None = None


def _bind(params: Params) -> tuple[Any, ...]:
    """Normalize user parameters into exec_driver_sql arguments."""
    if params is None:
        return ()
    if isinstance(params, Mapping):
        return (dict(params),)
    # a list would be read as an executemany batch
    return (tuple(params),)


def _decode(row: RowMapping, as_: Callable[..., T] | None) -> Any:
    if as_ is None:
        return dict(row)
    if as_ is tuple:
        return tuple(row.values())
    try:
        return as_(**row)
    except (TypeError, ValueError) as exc:
        name = getattr(as_, "__name__", repr(as_))
        raise SerializationError(f"cannot decode row into {name}: {exc}", exc) from exc


class DatabaseConnection:
    """Shared handle to one connection pool.

    Every holder of the same instance runs against the same pool. In-memory
    targets use a single connection, so access to it is serialized.
    """

    def __init__(self, engine: AsyncEngine, *, in_memory: bool = False):
        self._engine = engine
        self._in_memory = in_memory
        self._serial = asyncio.Lock() if in_memory else None

    @classmethod
    async def open(
        cls,
        url: str | URL,
        settings: DatabaseSettings | None = None,
        *,
        in_memory: bool = False,
    ) -> DatabaseConnection:
        """Create the pool and check that the target can actually be read."""
        settings = settings or DatabaseSettings()
        engine: AsyncEngine | None = None
        try:
            if in_memory:
                engine = create_async_engine(url, echo=settings.echo, poolclass=StaticPool)
            else:
                engine = create_async_engine(
                    url,
                    echo=settings.echo,
                    poolclass=AsyncAdaptedQueuePool,
                    pool_size=settings.max_connections,
                    max_overflow=0,
                    pool_timeout=settings.pool_timeout,
                    connect_args={"timeout": settings.busy_timeout},
                )
            _install_pragmas(engine, settings, in_memory=in_memory)

            async with engine.connect() as conn:
                # reads the schema page, so a non-database file fails here
                await conn.exec_driver_sql("SELECT count(*) FROM sqlite_master")
        except (SQLAlchemyError, OSError) as exc:
            if engine is not None:
                await engine.dispose()
            raise DatabaseConnectionError(exc) from exc

        return cls(engine, in_memory=in_memory)

    @property
    def pool(self) -> AsyncEngine:
        return self._engine

    @property
    def in_memory(self) -> bool:
        return self._in_memory

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Check out a connection inside a transaction (commit on success)."""
        if self._serial is None:
            async with self._engine.begin() as conn:
                yield conn
            return

        async with self._serial:
            async with self._engine.begin() as conn:
                yield conn

    async def close(self) -> None:
        await self._engine.dispose()


def _install_pragmas(engine: AsyncEngine, settings: DatabaseSettings, *, in_memory: bool) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        if not in_memory and settings.journal_mode:
            cursor.execute(f"PRAGMA journal_mode={settings.journal_mode}")
        cursor.close()


class Database:
    """Lifecycle wrapper around one logical SQLite database.

    Constructing a ``Database`` performs no I/O. ``initialize()`` creates the
    parent directory (file targets) and opens the pool; ``close()`` releases
    it for good. Query helpers raise ``NotInitializedError`` until the handle
    is ready, and ``DatabaseClosedError`` once it has been closed.
    """

    def __init__(
        self,
        path: str | os.PathLike[str] = MEMORY_SENTINEL,
        settings: DatabaseSettings | None = None,
    ):
        self._path = os.fspath(path)
        self.settings = settings or DatabaseSettings()
        self._connection: DatabaseConnection | None = None
        self._closed = False
        self._init_lock = asyncio.Lock()

    # -- constructors ------------------------------------------------------

    @classmethod
    def new(cls, path: str | os.PathLike[str], settings: DatabaseSettings | None = None) -> Database:
        return cls(path, settings)

    @classmethod
    def new_in_memory(cls, settings: DatabaseSettings | None = None) -> Database:
        return cls(MEMORY_SENTINEL, settings)

    @classmethod
    def new_default(
        cls,
        env: Environment | None = None,
        settings: DatabaseSettings | None = None,
    ) -> Database:
        """Target the platform default location. Touches no files."""
        return cls(default_database_path(env), settings)

    @classmethod
    async def new_default_initialized(
        cls,
        env: Environment | None = None,
        settings: DatabaseSettings | None = None,
    ) -> Database:
        db = cls.new_default(env, settings)
        await db.initialize()
        return db

    @classmethod
    def from_settings(cls, settings: DatabaseSettings, env: Environment | None = None) -> Database:
        """Use ``settings.path`` when set, otherwise the platform default."""
        if settings.path is None:
            return cls.new_default(env, settings)
        return cls(settings.path, settings)

    # -- state -------------------------------------------------------------

    @property
    def path(self) -> str:
        return self._path

    @property
    def in_memory(self) -> bool:
        return self._path == MEMORY_SENTINEL

    @property
    def is_initialized(self) -> bool:
        return self._connection is not None

    @property
    def is_closed(self) -> bool:
        return self._closed

    def __repr__(self) -> str:
        if self._closed:
            state = "closed"
        elif self._connection is not None:
            state = "ready"
        else:
            state = "uninitialized"
        return f"Database(path={self._path!r}, state={state})"

    # -- lifecycle ---------------------------------------------------------

    async def initialize(self) -> None:
        """Create the parent directory if needed and open the pool.

        Raises:
            DirectoryCreationError: the parent directory could not be created.
            DatabaseConnectionError: the engine could not open the target.
            DatabaseClosedError: the handle was already closed.
        """
        async with self._init_lock:
            if self._closed:
                raise DatabaseClosedError()
            if self._connection is not None:
                logger.warning("Database %s is already initialized; ignoring", self._path)
                return

            if self.in_memory:
                database = MEMORY_SENTINEL
            else:
                target = Path(self._path)
                ensure_parent_dir(target)
                database = target.as_posix()
            # URL.create keeps '?', '#' and '%' in file names literal
            url = URL.create(SQLITE_DRIVER, database=database)

            self._connection = await DatabaseConnection.open(
                url, self.settings, in_memory=self.in_memory
            )
            logger.info(
                "Opened database %s (max_connections=%d)",
                self._path,
                1 if self.in_memory else self.settings.max_connections,
            )

    def connection(self) -> DatabaseConnection:
        if self._closed:
            raise DatabaseClosedError()
        if self._connection is None:
            raise NotInitializedError()
        return self._connection

    async def create_tables(self) -> None:
        """Placeholder for schema setup; only checks the handle is ready."""
        self.connection()

    async def close(self) -> None:
        """Release the pool. The handle cannot be used again afterwards.

        Waits for an in-flight ``initialize()`` so its pool is disposed too.
        """
        async with self._init_lock:
            connection, self._connection = self._connection, None
            self._closed = True
        if connection is not None:
            await connection.close()
            logger.info("Closed database %s", self._path)

    async def __aenter__(self) -> Database:
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    # -- queries -----------------------------------------------------------

    async def execute(self, sql: str, params: Params = None) -> ExecuteResult:
        """Run a statement and commit it.

        Positional parameters use ``?`` placeholders (pass a sequence), named
        ones ``:name`` (pass a mapping).
        """
        conn = self.connection()
        try:
            async with conn.transaction() as c:
                result = await c.exec_driver_sql(sql, *_bind(params))
                return ExecuteResult(
                    rows_affected=max(result.rowcount, 0),
                    last_insert_id=result.lastrowid or None,
                )
        except SQLAlchemyError as exc:
            raise QueryError(exc) from exc

    # alias
    execute_query = execute

    async def _rows(self, sql: str, params: Params, limit: int | None = None) -> list[RowMapping]:
        conn = self.connection()
        try:
            async with conn.transaction() as c:
                result = await c.exec_driver_sql(sql, *_bind(params))
                if limit is None:
                    return list(result.mappings().all())
                return list(result.mappings().fetchmany(limit))
        except SQLAlchemyError as exc:
            raise QueryError(exc) from exc

    async def fetch_one(
        self, sql: str, params: Params = None, as_: Callable[..., T] | None = None
    ) -> Any:
        """Return exactly one row.

        Raises:
            RowNotFoundError: no row matched.
            QueryError: more than one row matched, or the statement failed.
        """
        # a second row is enough to reject the result
        rows = await self._rows(sql, params, limit=2)
        if not rows:
            raise RowNotFoundError()
        if len(rows) > 1:
            raise QueryError("expected one row, got more")
        return _decode(rows[0], as_)

    async def fetch_optional(
        self, sql: str, params: Params = None, as_: Callable[..., T] | None = None
    ) -> Any | None:
        """Return the first matching row, or None when nothing matched."""
        rows = await self._rows(sql, params, limit=1)
        if not rows:
            return None
        return _decode(rows[0], as_)

    async def fetch_all(
        self, sql: str, params: Params = None, as_: Callable[..., T] | None = None
    ) -> list[Any]:
        rows = await self._rows(sql, params)
        return [_decode(row, as_) for row in rows]


async def create_database(
    path: str | os.PathLike[str], settings: DatabaseSettings | None = None
) -> Database:
    db = Database.new(path, settings)
    await db.initialize()
    return db


async def create_in_memory_database(settings: DatabaseSettings | None = None) -> Database:
    db = Database.new_in_memory(settings)
    await db.initialize()
    return db


async def create_default_database(
    env: Environment | None = None, settings: DatabaseSettings | None = None
) -> Database:
    return await Database.new_default_initialized(env, settings)
