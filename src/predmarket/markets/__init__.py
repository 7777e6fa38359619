"""Market domain: models, demo data and the market service."""

from predmarket.markets.models import (
    Market,
    MarketCreate,
    MarketPage,
    MarketQuery,
    MarketSort,
    MarketStatus,
)
from predmarket.markets.service import MarketService

__all__ = [
    "Market",
    "MarketCreate",
    "MarketPage",
    "MarketQuery",
    "MarketService",
    "MarketSort",
    "MarketStatus",
]
