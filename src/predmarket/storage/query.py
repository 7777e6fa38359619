"""SQL builders for the market listing.

Every piece of user input reaches Postgres as a bound ``$n`` parameter; only
fixed fragments from this module are ever interpolated. The semantics match
``apply_filters_sort`` in ``predmarket.storage.memory``:

- category: exact match
- tag: membership in the JSONB ``tags`` array
- search: case-insensitive substring of the title (``%`` and ``_`` are literal)
"""

from __future__ import annotations

from typing import Any

import orjson

from predmarket.core.constants import MARKETS_TABLE
from predmarket.markets.models import MarketQuery, MarketSort

MARKET_COLUMNS = (
    "id, title, description, category, tags, volume, liquidity, "
    "ends_at, probability, status, created_at"
)

# Tie-breakers keep pagination stable when the primary key is equal
_TIEBREAK = "created_at DESC NULLS LAST, id ASC"

_ORDER_BY: dict[MarketSort, str] = {
    MarketSort.TRENDING: "(COALESCE(volume, 0) + COALESCE(liquidity, 0)) DESC",
    MarketSort.VOLUME: "COALESCE(volume, 0) DESC",
    MarketSort.LIQUIDITY: "COALESCE(liquidity, 0) DESC",
    MarketSort.ENDING: "ends_at ASC",
}


def build_where(query: MarketQuery) -> tuple[str, list[Any]]:
    """Build the WHERE clause and its parameters.

    Returns:
        ``("WHERE ...", params)`` or ``("", [])`` when no filter is set.
    """
    clauses: list[str] = []
    params: list[Any] = []

    if query.category:
        params.append(query.category)
        clauses.append(f"category = ${len(params)}")
    if query.tag:
        params.append(orjson.dumps([query.tag]).decode("utf-8"))
        clauses.append(f"tags @> ${len(params)}::jsonb")
    if query.search:
        params.append(query.search.lower())
        clauses.append(f"strpos(LOWER(title), ${len(params)}) > 0")

    if not clauses:
        return "", params
    return "WHERE " + " AND ".join(clauses), params


def build_order(sort: MarketSort) -> str:
    """Build the ORDER BY clause for a sort key."""
    return f"ORDER BY {_ORDER_BY[sort]}, {_TIEBREAK}"


def build_count_query(query: MarketQuery) -> tuple[str, list[Any]]:
    """Build ``SELECT COUNT(*)`` over the filtered markets."""
    where_sql, params = build_where(query)
    sql = f"SELECT COUNT(*) FROM {MARKETS_TABLE} {where_sql}".rstrip()
    return sql, params


def build_list_query(query: MarketQuery) -> tuple[str, list[Any]]:
    """Build the paged SELECT for the filtered, sorted markets."""
    where_sql, params = build_where(query)
    params = [*params, query.page_size, query.offset]
    limit_idx = len(params) - 1
    parts = [
        f"SELECT {MARKET_COLUMNS} FROM {MARKETS_TABLE}",
        where_sql,
        build_order(query.sort),
        f"LIMIT ${limit_idx} OFFSET ${limit_idx + 1}",
    ]
    return " ".join(p for p in parts if p), params
