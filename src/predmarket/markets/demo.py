"""Demo markets served by the in-memory store and loaded by ``predmarket-seed``."""

from datetime import datetime, timedelta, timezone
from typing import NamedTuple

from predmarket.markets.models import Market


class DemoMarket(NamedTuple):
    title: str
    category: str
    tags: tuple[str, ...]
    volume: float
    liquidity: float
    probability: float
    days_ahead: int


DEMO_MARKETS: tuple[DemoMarket, ...] = (
    DemoMarket("BTC above $80k by Dec 31", "Crypto", ("DeFi", "L2"), 1_250_000, 75_000, 62, 365),
    DemoMarket("ETH staking share > 30% in Q4", "Crypto", ("DeFi",), 620_000, 50_000, 54, 288),
    DemoMarket("OpenAI releases GPT-6 by May", "AI", ("NLP",), 980_000, 82_000, 47, 121),
    DemoMarket("Team X wins the championship", "Sports", ("League",), 310_000, 20_000, 41, 89),
    DemoMarket(
        "Election candidate Y wins presidency", "Politics", ("Election",), 2_200_000, 120_000, 58, 309
    ),
    DemoMarket("Global GDP growth > 3% in 2025", "Economy", ("GDP",), 450_000, 45_000, 35, 354),
    DemoMarket("Successful lunar mission launch", "Science", ("Space",), 530_000, 30_000, 72, 196),
    DemoMarket("New Layer-2 beats 5k TPS", "Crypto", ("L2",), 270_000, 18_000, 49, 152),
    DemoMarket("Bitcoin ETF inflows exceed $5B in Q1", "Crypto", ("ETF",), 800_000, 55_000, 57, 90),
    DemoMarket("AI model surpasses human on LSAT", "AI", ("NLP",), 350_000, 20_000, 44, 120),
    DemoMarket("Team Y reaches finals", "Sports", ("League",), 150_000, 12_000, 33, 41),
    DemoMarket("Candidate Z loses primary", "Politics", ("Election",), 900_000, 65_000, 48, 263),
    DemoMarket("US CPI < 3% by year-end", "Economy", ("CPI",), 420_000, 32_000, 51, 346),
    DemoMarket("SpaceX lands Starship successfully", "Science", ("Space",), 1_100_000, 90_000, 69, 213),
    DemoMarket("New L3 gains 1M users", "Crypto", ("L2",), 380_000, 25_000, 46, 182),
    DemoMarket("Chatbot passes Turing Test", "AI", ("NLP",), 730_000, 42_000, 40, 274),
    DemoMarket("Olympic world record broken", "Sports", ("Olympics",), 210_000, 15_000, 28, 227),
    DemoMarket("EU adopts crypto MiCA v2", "Politics", ("Regulation",), 500_000, 35_000, 55, 335),
    DemoMarket("Global GDP growth > 4%", "Economy", ("GDP",), 300_000, 22_000, 31, 329),
    DemoMarket(
        "James Webb discovers exoplanet biosignatures", "Science", ("Space",), 250_000, 21_000, 24, 252
    ),
)


def demo_markets(now: datetime | None = None, limit: int | None = None) -> list[Market]:
    """Build demo markets with close dates relative to ``now``.

    Ids are stable ("1", "2", ...) so re-seeding a database is idempotent.
    ``created_at`` steps back one minute per entry, which keeps the list
    newest-first in declaration order.
    """
    now = now or datetime.now(timezone.utc)
    selected = DEMO_MARKETS if limit is None else DEMO_MARKETS[:limit]
    return [
        Market(
            id=str(i),
            title=demo.title,
            category=demo.category,
            tags=list(demo.tags),
            volume=demo.volume,
            liquidity=demo.liquidity,
            ends_at=now + timedelta(days=demo.days_ahead),
            probability=demo.probability,
            status="open",
            created_at=now - timedelta(minutes=i),
        )
        for i, demo in enumerate(selected, start=1)
    ]
