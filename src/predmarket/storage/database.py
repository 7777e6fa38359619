"""PostgreSQL database connection using raw asyncpg."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, cast

import asyncpg

from predmarket.core.exceptions import DatabaseConnectionError
from predmarket.core.logging import get_logger

logger = get_logger(__name__)


def normalize_dsn(dsn: str) -> str:
    """Convert SQLAlchemy-style DSNs to the form asyncpg accepts."""
    for prefix in ("postgresql+asyncpg://", "postgres+asyncpg://"):
        if dsn.startswith(prefix):
            return "postgresql://" + dsn[len(prefix) :]
    return dsn


class Database:
    """Async PostgreSQL database wrapper using asyncpg."""

    def __init__(
        self,
        dsn: str,
        min_size: int = 1,
        max_size: int = 10,
        ssl: bool = False,
    ) -> None:
        self._dsn = dsn
        self._min_size = min_size
        self._max_size = max_size
        self._ssl = ssl
        self._pool: asyncpg.Pool[asyncpg.Record] | None = None

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    async def connect(self) -> None:
        """Create connection pool."""
        dsn = normalize_dsn(self._dsn)
        try:
            # "require" encrypts without verifying the server certificate,
            # which is what hosted Postgres providers expect
            self._pool = await asyncpg.create_pool(
                dsn,
                min_size=self._min_size,
                max_size=self._max_size,
                ssl="require" if self._ssl else None,
            )
        except (OSError, asyncpg.PostgresError) as e:
            raise DatabaseConnectionError(f"Could not connect to database: {e}") from e
        logger.debug(
            "Database pool created",
            min_size=self._min_size,
            max_size=self._max_size,
            ssl=self._ssl,
        )

    async def disconnect(self) -> None:
        """Close connection pool."""
        if self._pool:
            await self._pool.close()
            self._pool = None
            logger.debug("Database pool closed")

    @asynccontextmanager
    async def acquire(self) -> AsyncIterator[asyncpg.Connection[asyncpg.Record]]:
        """Acquire a connection from the pool."""
        if not self._pool:
            raise RuntimeError("Database not connected. Call connect() first.")
        async with self._pool.acquire() as conn:
            yield conn

    async def execute(self, query: str, *args: Any) -> str:
        """Execute a query and return status."""
        async with self.acquire() as conn:
            result = await conn.execute(query, *args)
            return cast(str, result)

    async def fetch(self, query: str, *args: Any) -> list[asyncpg.Record]:
        """Fetch multiple rows."""
        async with self.acquire() as conn:
            result = await conn.fetch(query, *args)
            return list(result)

    async def fetchrow(self, query: str, *args: Any) -> asyncpg.Record | None:
        """Fetch a single row."""
        async with self.acquire() as conn:
            return await conn.fetchrow(query, *args)

    async def fetchval(self, query: str, *args: Any) -> Any:
        """Fetch a single value."""
        async with self.acquire() as conn:
            return await conn.fetchval(query, *args)


# Global database instance (initialized in lifespan)
_db: Database | None = None


async def init_database(
    dsn: str, min_size: int = 1, max_size: int = 10, ssl: bool = False
) -> Database:
    """Initialize the global database instance."""
    global _db
    db = Database(dsn, min_size=min_size, max_size=max_size, ssl=ssl)
    await db.connect()
    _db = db
    return db


async def close_database() -> None:
    """Close the global database instance."""
    global _db
    if _db:
        await _db.disconnect()
        _db = None
