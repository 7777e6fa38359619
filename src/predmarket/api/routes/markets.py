"""Market listing, lookup and creation endpoints."""

from fastapi import APIRouter, HTTPException, Query, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from predmarket.config import get_settings
from predmarket.core.dependencies import MarketServiceDep, SettingsDep
from predmarket.core.exceptions import MarketNotFoundError
from predmarket.markets.models import Market, MarketCreate, MarketPage, MarketQuery, MarketSort

router = APIRouter()
limiter = Limiter(key_func=get_remote_address)


def _create_rate_limit() -> str:
    return get_settings().market_create_rate_limit


@router.get("", response_model=MarketPage)
async def list_markets(
    service: MarketServiceDep,
    settings: SettingsDep,
    page: int = Query(default=1, description="1-based page number; values below 1 mean 1"),
    page_size: int | None = Query(
        default=None, alias="pageSize", description="Items per page (default 9, max 100)"
    ),
    category: str | None = Query(default=None, description="Exact category match"),
    tag: str | None = Query(default=None, description="Only markets carrying this tag"),
    search: str | None = Query(default=None, description="Case-insensitive title substring"),
    sort: str | None = Query(
        default=None,
        description="trending | volume | liquidity | ending (unknown values mean trending)",
    ),
) -> MarketPage:
    """List markets with filtering, sorting and pagination.

    Example:
        GET /api/markets?category=Crypto&sort=volume&page=2&pageSize=6
    """
    size = settings.default_page_size if page_size is None else page_size
    query = MarketQuery(
        page=page,
        page_size=min(size, settings.max_page_size),
        category=category,
        tag=tag,
        search=search,
        sort=MarketSort.parse(sort),
    )
    return await service.list_markets(query)


@router.get("/{market_id}", response_model=Market)
async def get_market(market_id: str, service: MarketServiceDep) -> Market:
    try:
        return await service.get_market(market_id)
    except MarketNotFoundError:
        raise HTTPException(status_code=404, detail="Not found")


@router.post("", response_model=Market, status_code=201)
@limiter.limit(_create_rate_limit)
async def create_market(
    request: Request,
    body: MarketCreate,
    service: MarketServiceDep,
) -> Market:
    """Create an open market. Volume starts at zero; the id is generated."""
    return await service.create_market(body)
