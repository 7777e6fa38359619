"""Postgres-backed market store."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

import orjson

from predmarket.core.constants import MARKET_DEFAULT_PROBABILITY, MARKETS_TABLE
from predmarket.core.logging import get_logger
from predmarket.markets.models import Market, MarketPage, MarketQuery
from predmarket.storage.database import Database
from predmarket.storage.query import MARKET_COLUMNS, build_count_query, build_list_query

logger = get_logger(__name__)

SCHEMA_STATEMENTS: tuple[str, ...] = (
    f"""
    CREATE TABLE IF NOT EXISTS {MARKETS_TABLE} (
        id TEXT PRIMARY KEY,
        title TEXT NOT NULL,
        description TEXT,
        category TEXT NOT NULL,
        tags JSONB DEFAULT '[]'::jsonb,
        volume NUMERIC DEFAULT 0,
        liquidity NUMERIC DEFAULT 0,
        ends_at TIMESTAMPTZ NOT NULL,
        probability NUMERIC DEFAULT 50,
        status TEXT DEFAULT 'open',
        created_at TIMESTAMPTZ DEFAULT now()
    )
    """,
    f"CREATE INDEX IF NOT EXISTS idx_markets_ends_at ON {MARKETS_TABLE} (ends_at)",
    f"CREATE INDEX IF NOT EXISTS idx_markets_tags ON {MARKETS_TABLE} USING GIN (tags)",
)

_INSERT_SQL = f"""
    INSERT INTO {MARKETS_TABLE} (
        id, title, description, category, tags, volume, liquidity,
        ends_at, probability, status, created_at
    )
    VALUES ($1, $2, $3, $4, $5::jsonb, $6, $7, $8, $9, $10, COALESCE($11, now()))
"""


def _decode_tags(raw: Any) -> list[str]:
    """asyncpg hands JSONB back as text unless a codec is registered."""
    if raw is None:
        return []
    if isinstance(raw, (str, bytes)):
        raw = orjson.loads(raw or "[]")
    if not isinstance(raw, list):
        return []
    return [str(t) for t in raw]


def row_to_market(row: Mapping[str, Any]) -> Market:
    """Map a ``markets`` row to a Market (NUMERIC -> float, JSONB -> list)."""
    probability = row["probability"]
    return Market(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        category=row["category"],
        tags=_decode_tags(row["tags"]),
        volume=float(row["volume"] or 0),
        liquidity=float(row["liquidity"] or 0),
        ends_at=row["ends_at"],
        probability=float(probability) if probability is not None else MARKET_DEFAULT_PROBABILITY,
        status=row["status"] or "open",
        created_at=row["created_at"],
    )


def _insert_args(market: Market) -> tuple[Any, ...]:
    return (
        market.id,
        market.title,
        market.description,
        market.category,
        orjson.dumps(market.tags).decode("utf-8"),
        market.volume,
        market.liquidity,
        market.ends_at,
        market.probability,
        market.status,
        market.created_at,
    )


class PostgresMarketStore:
    """Market store backed by the ``markets`` table."""

    def __init__(self, db: Database) -> None:
        self._db = db

    @property
    def uses_database(self) -> bool:
        return True

    async def ensure_schema(self) -> None:
        """Create the markets table and its indexes if missing."""
        for statement in SCHEMA_STATEMENTS:
            await self._db.execute(statement)
        logger.info("DB schema ensured", table=MARKETS_TABLE)

    async def list_markets(self, query: MarketQuery) -> MarketPage:
        count_sql, count_params = build_count_query(query)
        total = await self._db.fetchval(count_sql, *count_params)

        list_sql, list_params = build_list_query(query)
        rows = await self._db.fetch(list_sql, *list_params)

        return MarketPage(
            items=[row_to_market(r) for r in rows],
            total=int(total or 0),
            page=query.page,
            page_size=query.page_size,
        )

    async def get_market(self, market_id: str) -> Market | None:
        row = await self._db.fetchrow(
            f"SELECT {MARKET_COLUMNS} FROM {MARKETS_TABLE} WHERE id = $1",
            market_id,
        )
        return row_to_market(row) if row else None

    async def create_market(self, market: Market) -> Market:
        await self._db.execute(_INSERT_SQL, *_insert_args(market))
        logger.debug("Market inserted", market_id=market.id)
        return market

    async def seed(self, markets: Iterable[Market]) -> int:
        """Insert markets, skipping ids that already exist.

        Returns:
            Number of rows actually inserted
        """
        inserted = 0
        sql = _INSERT_SQL + " ON CONFLICT (id) DO NOTHING"
        for market in markets:
            status = await self._db.execute(sql, *_insert_args(market))
            # Status looks like "INSERT 0 1"
            if status.rsplit(" ", 1)[-1] == "1":
                inserted += 1
        logger.info("Markets seeded", inserted=inserted)
        return inserted

    async def ping(self) -> bool:
        return bool(await self._db.fetchval("SELECT 1"))

    async def close(self) -> None:
        await self._db.disconnect()
