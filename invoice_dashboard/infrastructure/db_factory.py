"""
Database access for the invoice dashboard.

`Database` owns a psycopg async connection pool with an explicit lifecycle:
construct it, `await open()` at process start and `await close()` at
shutdown (or use it as an async context manager). Queries, actions and the
seed loader receive the instance as an argument; nothing here is a
module-level singleton.

Only the startup connectivity probe is retried (tenacity); statements issued
through an open pool are never retried.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence, Union

import psycopg
from psycopg import AsyncConnection, sql
from psycopg.rows import dict_row
from psycopg_pool import AsyncConnectionPool
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from invoice_dashboard.config import Settings, get_settings
from invoice_dashboard.utils.logging import get_logger

log = get_logger(__name__)

Query = Union[str, sql.Composable]
Params = Optional[Union[Sequence[Any], Dict[str, Any]]]
Row = Dict[str, Any]


def build_dsn(settings: Optional[Settings] = None) -> str:
    """Compose a DSN string from settings; `POSTGRES_URL` wins when set."""
    settings = settings or get_settings()
    if settings.database_url:
        return settings.database_url
    return (
        f"postgresql://{settings.db_user}:{settings.db_password}"
        f"@{settings.db_host}:{settings.db_port}/{settings.db_name}"
        f"?sslmode={settings.db_sslmode}"
    )


@retry(
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    retry=retry_if_exception_type(psycopg.OperationalError),
    reraise=True,
)
async def probe_connection(dsn: str) -> None:
    """
    Open and close a single connection, retrying transient failures.

    Raises
    ------
    psycopg.OperationalError
        If the database is still unreachable after all attempts.
    """
    conn = await AsyncConnection.connect(dsn)
    try:
        await conn.execute("SELECT 1")
    finally:
        await conn.close()


class Database:
    """
    Pooled, dict-row PostgreSQL client.

    Example
    -------
        async with Database() as db:
            rows = await db.fetch_all("SELECT id, name FROM customers")
    """

    def __init__(
        self,
        dsn: Optional[str] = None,
        min_size: Optional[int] = None,
        max_size: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self._dsn = dsn or build_dsn(settings)
        self.min_size = settings.db_pool_min_size if min_size is None else min_size
        self.max_size = settings.db_pool_max_size if max_size is None else max_size
        self._pool: AsyncConnectionPool | None = None

    @property
    def is_open(self) -> bool:
        return self._pool is not None

    async def open(self) -> None:
        """Probe connectivity, then open the pool. Idempotent."""
        if self._pool is not None:
            return
        await probe_connection(self._dsn)
        pool = AsyncConnectionPool(
            conninfo=self._dsn,
            min_size=self.min_size,
            max_size=self.max_size,
            kwargs={"row_factory": dict_row},
            open=False,
        )
        await pool.open(wait=True)
        self._pool = pool
        log.info(
            "Database pool opened",
            extra={"pool_min_size": self.min_size, "pool_max_size": self.max_size},
        )

    async def close(self) -> None:
        """Close the pool and release its connections. Idempotent."""
        if self._pool is None:
            return
        pool, self._pool = self._pool, None
        await pool.close()
        log.info("Database pool closed")

    async def __aenter__(self) -> "Database":
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    def _require_pool(self) -> AsyncConnectionPool:
        if self._pool is None:
            raise RuntimeError("Database is not open; call `await db.open()` first.")
        return self._pool

    @asynccontextmanager
    async def connection(self) -> AsyncIterator[AsyncConnection]:
        """Borrow a pooled connection; the pool commits on clean exit."""
        async with self._require_pool().connection() as conn:
            yield conn

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncConnection]:
        """Borrow a connection wrapped in a single transaction."""
        async with self.connection() as conn:
            async with conn.transaction():
                yield conn

    async def fetch_all(self, query: Query, params: Params = None) -> List[Row]:
        async with self.connection() as conn:
            cur = await conn.execute(query, params)
            return await cur.fetchall()

    async def fetch_one(self, query: Query, params: Params = None) -> Optional[Row]:
        async with self.connection() as conn:
            cur = await conn.execute(query, params)
            return await cur.fetchone()

    async def fetch_value(self, query: Query, params: Params = None) -> Any:
        """Return the first column of the first row, or None when there is no row."""
        row = await self.fetch_one(query, params)
        if row is None:
            return None
        return next(iter(row.values()))

    async def execute(self, query: Query, params: Params = None) -> int:
        """Run a statement and return the number of affected rows."""
        async with self.connection() as conn:
            cur = await conn.execute(query, params)
            return cur.rowcount


__all__ = [
    "Database",
    "build_dsn",
    "probe_connection",
]
