"""Market store interface and backend selection."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from predmarket.core.logging import get_logger
from predmarket.markets.models import Market, MarketPage, MarketQuery
from predmarket.storage.database import init_database
from predmarket.storage.memory import InMemoryMarketStore
from predmarket.storage.postgres import PostgresMarketStore

if TYPE_CHECKING:
    from predmarket.config import Settings

logger = get_logger(__name__)


class MarketStore(Protocol):
    """Operations both the Postgres and in-memory stores provide."""

    @property
    def uses_database(self) -> bool: ...

    async def list_markets(self, query: MarketQuery) -> MarketPage: ...

    async def get_market(self, market_id: str) -> Market | None: ...

    async def create_market(self, market: Market) -> Market: ...

    async def ping(self) -> bool: ...

    async def close(self) -> None: ...


async def create_market_store(settings: "Settings") -> MarketStore:
    """Build the store for these settings.

    Postgres when DATABASE_URL is set (pool connected, schema ensured),
    otherwise the seeded in-memory list.
    """
    if settings.database_url is None:
        logger.info("No DATABASE_URL configured, using in-memory market store")
        return InMemoryMarketStore()

    db = await init_database(
        settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        ssl=settings.database_ssl,
    )
    store = PostgresMarketStore(db)
    await store.ensure_schema()
    logger.info("Using Postgres market store")
    return store
