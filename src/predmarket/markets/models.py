"""Market models shared by the API and both storage backends.

The JSON wire format is camelCase (``endsAt``, ``pageSize``) because the
explore page and create form already speak it; Python attributes stay
snake_case and pydantic aliases bridge the two.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from predmarket.core.constants import (
    DEFAULT_PAGE_SIZE,
    MARKET_CATEGORY_MAX_LENGTH,
    MARKET_DEFAULT_PROBABILITY,
    MARKET_MAX_TAGS,
    MARKET_TITLE_MAX_LENGTH,
    MARKET_TITLE_MIN_LENGTH,
    MAX_PAGE,
    MAX_PAGE_SIZE,
)

MarketStatus = Literal["open", "closed"]


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and normalise aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MarketSort(str, Enum):
    """Orderings supported by the market listing."""

    TRENDING = "trending"  # volume + liquidity, desc
    VOLUME = "volume"
    LIQUIDITY = "liquidity"
    ENDING = "ending"  # soonest close first

    @classmethod
    def parse(cls, value: str | MarketSort | None) -> MarketSort:
        """Parse a sort key, falling back to trending for anything unknown."""
        if isinstance(value, MarketSort):
            return value
        try:
            return cls((value or "").strip().lower())
        except ValueError:
            return cls.TRENDING


class Market(BaseModel):
    """A prediction market as stored and served."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(min_length=1)
    title: str
    description: str | None = None
    category: str
    tags: list[str] = Field(default_factory=list)
    volume: float = Field(default=0.0, ge=0.0)
    liquidity: float = Field(default=0.0, ge=0.0)
    ends_at: datetime = Field(alias="endsAt")
    probability: float = Field(default=MARKET_DEFAULT_PROBABILITY, ge=0.0, le=100.0)
    status: MarketStatus = "open"
    created_at: datetime | None = Field(default=None, alias="createdAt")

    @field_validator("ends_at", "created_at")
    @classmethod
    def normalise_timestamps(cls, v: datetime | None) -> datetime | None:
        return ensure_utc(v) if v is not None else None

    @property
    def trending_score(self) -> float:
        return self.volume + self.liquidity


class MarketCreate(BaseModel):
    """Body of ``POST /api/markets``.

    Extra keys sent by the create form (``type``, ``oracle``, ``collateral``)
    are accepted and ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore", str_strip_whitespace=True)

    title: str = Field(min_length=MARKET_TITLE_MIN_LENGTH, max_length=MARKET_TITLE_MAX_LENGTH)
    description: str | None = None
    category: str = Field(min_length=1, max_length=MARKET_CATEGORY_MAX_LENGTH)
    close_at: datetime = Field(alias="closeAt")
    tags: list[str] = Field(default_factory=list)
    liquidity: float = Field(default=0.0, ge=0.0)
    probability: float = Field(default=MARKET_DEFAULT_PROBABILITY, ge=0.0, le=100.0)

    @field_validator("description")
    @classmethod
    def blank_description(cls, v: str | None) -> str | None:
        return v or None

    @field_validator("liquidity", "probability", mode="before")
    @classmethod
    def null_to_default(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None:
            return 0.0 if info.field_name == "liquidity" else MARKET_DEFAULT_PROBABILITY
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, v: Any) -> Any:
        return [] if v is None else v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: list[str]) -> list[str]:
        seen: dict[str, None] = {}
        for tag in v:
            if tag:
                seen.setdefault(tag, None)
        tags = list(seen)
        if len(tags) > MARKET_MAX_TAGS:
            raise ValueError(f"at most {MARKET_MAX_TAGS} tags allowed")
        return tags

    @field_validator("close_at")
    @classmethod
    def close_in_future(cls, v: datetime) -> datetime:
        v = ensure_utc(v)
        if v <= datetime.now(timezone.utc):
            raise ValueError("closeAt must be in the future")
        return v


class MarketQuery(BaseModel):
    """Filter, sort and pagination options for the market listing.

    Out-of-range pages and page sizes are clamped rather than rejected.
    Blank filter strings mean "no filter".
    """

    model_config = ConfigDict(populate_by_name=True)

    page: int = 1
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, alias="pageSize")
    category: str | None = None
    tag: str | None = None
    search: str | None = None
    sort: MarketSort = MarketSort.TRENDING

    @field_validator("page")
    @classmethod
    def clamp_page(cls, v: int) -> int:
        return min(max(v, 1), MAX_PAGE)

    @field_validator("page_size")
    @classmethod
    def clamp_page_size(cls, v: int) -> int:
        return min(max(v, 1), MAX_PAGE_SIZE)

    @field_validator("category", "tag", "search")
    @classmethod
    def blank_filter(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        return v

    @field_validator("sort", mode="before")
    @classmethod
    def parse_sort(cls, v: Any) -> MarketSort:
        return MarketSort.parse(v)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


class MarketPage(BaseModel):
    """One page of the market listing."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[Market]
    total: int = Field(ge=0)
    page: int
    page_size: int = Field(alias="pageSize")
