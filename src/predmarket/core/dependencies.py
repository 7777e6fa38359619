"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from predmarket.config import Settings, get_settings
from predmarket.markets.service import MarketService
from predmarket.storage.base import MarketStore

# Type aliases for cleaner dependency injection
SettingsDep = Annotated[Settings, Depends(get_settings)]


def get_market_store(request: Request) -> MarketStore:
    """Get the MarketStore from app.state (set during lifespan)."""
    return request.app.state.market_store  # type: ignore[no-any-return]


def get_market_service(
    store: Annotated[MarketStore, Depends(get_market_store)],
) -> MarketService:
    """Wrap the active store in a MarketService."""
    return MarketService(store)


# Annotated dependencies for use in route handlers
MarketServiceDep = Annotated[MarketService, Depends(get_market_service)]
