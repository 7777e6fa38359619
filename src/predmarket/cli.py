"""CLI entry points for predmarket."""

import argparse
import asyncio
import sys

import uvicorn

from predmarket.config import get_settings
from predmarket.core.exceptions import DatabaseConnectionError
from predmarket.core.logging import get_logger, setup_logging
from predmarket.markets.demo import DEMO_MARKETS, demo_markets
from predmarket.storage.database import Database
from predmarket.storage.postgres import PostgresMarketStore

logger = get_logger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="predmarket API server")
    parser.add_argument("--reload", action="store_true", help="Enable auto-reload")
    parser.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser.add_argument("--port", type=int, default=3000, help="Bind port")
    args = parser.parse_args()

    uvicorn.run(
        "predmarket.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


async def run_seed(dsn: str, limit: int | None = None, ssl: bool = False) -> int:
    """Ensure the schema exists and insert the demo markets.

    Returns:
        Number of markets inserted (existing ids are skipped)
    """
    db = Database(dsn, min_size=1, max_size=2, ssl=ssl)
    await db.connect()
    try:
        store = PostgresMarketStore(db)
        await store.ensure_schema()
        return await store.seed(demo_markets(limit=limit))
    finally:
        await db.disconnect()


def seed() -> None:
    parser = argparse.ArgumentParser(description="Seed the markets table with demo data")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        choices=range(1, len(DEMO_MARKETS) + 1),
        metavar=f"1..{len(DEMO_MARKETS)}",
        help="Only insert the first N demo markets",
    )
    args = parser.parse_args()

    settings = get_settings()
    setup_logging(settings)
    if settings.database_url is None:
        print("DATABASE_URL is not set. Set it and rerun: predmarket-seed", file=sys.stderr)
        sys.exit(1)

    try:
        inserted = asyncio.run(
            run_seed(settings.database_url, limit=args.limit, ssl=settings.database_ssl)
        )
    except DatabaseConnectionError as e:
        logger.error("Seed failed", error=e.message)
        sys.exit(1)
    print(f"Seed completed: inserted {inserted} markets")
