"""Top-level API router, mounted under /api."""

from fastapi import APIRouter

from predmarket.api.routes import markets

api_router = APIRouter()
api_router.include_router(markets.router, prefix="/markets", tags=["markets"])
