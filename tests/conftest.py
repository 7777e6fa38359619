"""Pytest fixtures and configuration."""

from collections.abc import Iterator
from datetime import datetime, timedelta, timezone

import pytest
import structlog

from predmarket.markets.models import Market


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Skip integration tests by default unless -m integration is specified."""
    markexpr = config.getoption("-m", default="")
    if "integration" in markexpr:
        return

    skip_integration = pytest.mark.skip(reason="Integration test - run with: pytest -m integration")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Drop any logger configuration (and cached stream) a test installed."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def now() -> datetime:
    return datetime.now(timezone.utc)


@pytest.fixture
def make_market(now: datetime):
    """Factory for Market objects with sensible defaults."""

    def _make(**overrides: object) -> Market:
        defaults: dict[str, object] = {
            "id": "m-1",
            "title": "Will it rain tomorrow?",
            "description": None,
            "category": "Weather",
            "tags": ["Rain"],
            "volume": 1000.0,
            "liquidity": 500.0,
            "ends_at": now + timedelta(days=7),
            "probability": 50.0,
            "status": "open",
            "created_at": now,
        }
        defaults.update(overrides)
        return Market(**defaults)  # type: ignore[arg-type]

    return _make
