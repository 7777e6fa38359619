"""In-memory market store used when no DATABASE_URL is configured."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from predmarket.core.logging import get_logger
from predmarket.markets.demo import demo_markets
from predmarket.markets.models import Market, MarketPage, MarketQuery, MarketSort

logger = get_logger(__name__)


def _sort_key(sort: MarketSort) -> Callable[[Market], Any]:
    if sort is MarketSort.VOLUME:
        return lambda m: -m.volume
    if sort is MarketSort.LIQUIDITY:
        return lambda m: -m.liquidity
    if sort is MarketSort.ENDING:
        return lambda m: m.ends_at
    return lambda m: -m.trending_score


def apply_filters_sort(markets: Iterable[Market], query: MarketQuery) -> list[Market]:
    """Filter and sort markets the same way the SQL builder does.

    The sort is stable, so equal keys keep their incoming (newest-first) order.
    """
    rows = list(markets)
    if query.category:
        rows = [m for m in rows if m.category == query.category]
    if query.tag:
        rows = [m for m in rows if query.tag in m.tags]
    if query.search:
        needle = query.search.lower()
        rows = [m for m in rows if needle in m.title.lower()]
    rows.sort(key=_sort_key(query.sort))
    return rows


class InMemoryMarketStore:
    """Market store backed by a process-local list, newest first."""

    def __init__(self, markets: Iterable[Market] | None = None) -> None:
        self._markets: list[Market] = list(demo_markets() if markets is None else markets)

    @property
    def uses_database(self) -> bool:
        return False

    async def list_markets(self, query: MarketQuery) -> MarketPage:
        filtered = apply_filters_sort(self._markets, query)
        start = query.offset
        return MarketPage(
            items=filtered[start : start + query.page_size],
            total=len(filtered),
            page=query.page,
            page_size=query.page_size,
        )

    async def get_market(self, market_id: str) -> Market | None:
        return next((m for m in self._markets if m.id == market_id), None)

    async def create_market(self, market: Market) -> Market:
        self._markets.insert(0, market)
        logger.debug("Market stored in memory", market_id=market.id, total=len(self._markets))
        return market

    async def ping(self) -> bool:
        return True

    async def close(self) -> None:
        return None
