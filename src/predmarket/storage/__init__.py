"""Storage layer: PostgreSQL (asyncpg) with an in-memory fallback."""

from predmarket.storage.base import MarketStore, create_market_store
from predmarket.storage.database import Database, close_database, init_database
from predmarket.storage.memory import InMemoryMarketStore, apply_filters_sort
from predmarket.storage.postgres import PostgresMarketStore

__all__ = [
    "Database",
    "InMemoryMarketStore",
    "MarketStore",
    "PostgresMarketStore",
    "apply_filters_sort",
    "close_database",
    "create_market_store",
    "init_database",
]
