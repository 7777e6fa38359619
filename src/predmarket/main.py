"""FastAPI application entry point."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from predmarket.api import api_router, register_exception_handlers
from predmarket.api.routes.markets import limiter
from predmarket.config import get_settings
from predmarket.core.constants import LOCAL_DEV_ORIGIN_REGEX
from predmarket.core.dependencies import MarketServiceDep
from predmarket.core.logging import get_logger, setup_logging
from predmarket.storage import close_database, create_market_store

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan: opens the market store for the lifetime of the server."""
    settings = get_settings()
    setup_logging(settings)

    store = await create_market_store(settings)
    app.state.market_store = store
    logger.info("predmarket ready", env=settings.env, database=store.uses_database)
    try:
        yield
    finally:
        await store.close()
        await close_database()
        logger.info("predmarket stopped")


app = FastAPI(
    title="predmarket",
    description="Prediction market listing and creation API",
    version="0.1.0",
    lifespan=lifespan,
)

_settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.allowed_origins,
    # Without an explicit allow-list only the local dev servers may call us
    allow_origin_regex=None if _settings.allowed_origins else LOCAL_DEV_ORIGIN_REGEX,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["*"],
)

app.state.limiter = limiter
register_exception_handlers(app)

# Infrastructure (no prefix)


@app.get("/health")
async def health(service: MarketServiceDep) -> JSONResponse:
    """Liveness check; also pings the database when one is configured."""
    status = await service.health()
    return JSONResponse(status_code=200 if status["ok"] else 503, content=status)


# Domain API
app.include_router(api_router, prefix="/api")
