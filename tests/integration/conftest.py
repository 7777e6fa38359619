"""Fixtures for tests that need a live Postgres (DATABASE_URL)."""

import os
from collections.abc import AsyncIterator

import pytest

from predmarket.storage.database import Database
from predmarket.storage.postgres import PostgresMarketStore


@pytest.fixture
async def pg_store() -> AsyncIterator[PostgresMarketStore]:
    dsn = os.environ.get("DATABASE_URL")
    if not dsn:
        pytest.skip("DATABASE_URL not set")
    db = Database(dsn, min_size=1, max_size=2)
    await db.connect()
    store = PostgresMarketStore(db)
    await store.ensure_schema()
    await db.execute("TRUNCATE markets")
    try:
        yield store
    finally:
        await db.execute("TRUNCATE markets")
        await db.disconnect()
