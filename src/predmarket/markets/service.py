"""Market operations on top of a MarketStore."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import TYPE_CHECKING

import asyncpg

from predmarket.core.exceptions import MarketNotFoundError, StorageError
from predmarket.core.logging import get_logger
from predmarket.markets.models import Market, MarketCreate, MarketPage, MarketQuery

if TYPE_CHECKING:
    from predmarket.storage.base import MarketStore

logger = get_logger(__name__)


class MarketService:
    """List, fetch and create markets; report store health."""

    def __init__(self, store: "MarketStore") -> None:
        self._store = store

    async def list_markets(self, query: MarketQuery) -> MarketPage:
        page = await self._store.list_markets(query)
        logger.debug(
            "Markets listed",
            page=query.page,
            page_size=query.page_size,
            sort=query.sort.value,
            total=page.total,
        )
        return page

    async def get_market(self, market_id: str) -> Market:
        market = await self._store.get_market(market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    async def create_market(self, payload: MarketCreate) -> Market:
        """Create an open market from a validated payload.

        Volume is server-derived and always starts at zero.
        """
        market = Market(
            id=str(uuid.uuid4()),
            title=payload.title,
            description=payload.description,
            category=payload.category,
            tags=payload.tags,
            volume=0.0,
            liquidity=payload.liquidity,
            ends_at=payload.close_at,
            probability=payload.probability,
            status="open",
            created_at=datetime.now(timezone.utc),
        )
        created = await self._store.create_market(market)
        logger.info(
            "Market created",
            market_id=created.id,
            category=created.category,
            ends_at=created.ends_at.isoformat(),
        )
        return created

    async def health(self) -> dict[str, bool]:
        """Return ``{"ok": ..., "db": ...}`` for the health endpoint."""
        if not self._store.uses_database:
            return {"ok": True, "db": False}
        try:
            healthy = await self._store.ping()
        except (
            OSError,
            RuntimeError,
            StorageError,
            asyncpg.PostgresError,
            asyncpg.InterfaceError,
        ) as e:
            logger.warning("Database health check failed", error=str(e))
            healthy = False
        return {"ok": healthy, "db": healthy}
