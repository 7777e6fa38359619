"""End-to-end checks of PostgresMarketStore against a live database.

Run with: DATABASE_URL=postgresql://... pytest -m integration
"""

from datetime import datetime, timedelta, timezone

import pytest

from predmarket.markets.demo import demo_markets
from predmarket.markets.models import Market, MarketQuery, MarketSort
from predmarket.storage.memory import InMemoryMarketStore
from predmarket.storage.postgres import PostgresMarketStore

pytestmark = pytest.mark.integration


async def test_seed_is_idempotent(pg_store: PostgresMarketStore) -> None:
    markets = demo_markets()
    assert await pg_store.seed(markets) == len(markets)
    assert await pg_store.seed(markets) == 0


@pytest.mark.parametrize(
    "query",
    [
        MarketQuery(),
        MarketQuery(category="Crypto"),
        MarketQuery(tag="L2"),
        MarketQuery(search="gdp"),
        MarketQuery(sort=MarketSort.VOLUME, page=2, page_size=5),
        MarketQuery(sort=MarketSort.LIQUIDITY),
        MarketQuery(sort=MarketSort.ENDING, page_size=100),
    ],
)
async def test_matches_in_memory_store(
    pg_store: PostgresMarketStore, query: MarketQuery
) -> None:
    now = datetime.now(timezone.utc).replace(microsecond=0)
    markets = demo_markets(now)
    await pg_store.seed(markets)
    memory = InMemoryMarketStore(markets)

    expected = await memory.list_markets(query)
    actual = await pg_store.list_markets(query)

    assert actual.total == expected.total
    assert [m.id for m in actual.items] == [m.id for m in expected.items]


async def test_create_and_get(pg_store: PostgresMarketStore) -> None:
    market = Market(
        id="e2e-1",
        title="Integration market",
        category="Tests",
        tags=["pg", "jsonb"],
        volume=0.0,
        liquidity=10.0,
        ends_at=datetime.now(timezone.utc) + timedelta(days=3),
        probability=50.0,
        status="open",
    )
    created = await pg_store.create_market(market)
    assert created.created_at is not None

    fetched = await pg_store.get_market("e2e-1")
    assert fetched is not None
    assert fetched.tags == ["pg", "jsonb"]
    assert await pg_store.get_market("missing") is None
    assert await pg_store.ping() is True
