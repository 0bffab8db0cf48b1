"""Series construction and ranking.

Functions in this module turn validated dish records into per-dish monthly
series and rank dishes by total sales.

Expectations:
- Input: `CategoryRecord` objects and the ordered period labels of the sheet.
- Outputs: plain dicts/lists of pydantic models, ordered like the source.
"""
from __future__ import annotations

from typing import Iterable, Mapping, Sequence

import pandas as pd

from dish_sales.models import CategoryRecord, SeriesPoint

Series = list[SeriesPoint]
SeriesMap = dict[str, Series]


def build_series(records: Iterable[CategoryRecord], periods: Sequence[str]) -> SeriesMap:
    """Return each dish's series over `periods`.

    Args:
        records: Dish records in sheet order.
        periods: Ordered period labels.

    Returns:
        Dict dish → list of `SeriesPoint`, one per period in period order.
        Missing values are 0. Dict order follows `records`.
    """
    return {
        r.name: [SeriesPoint(period=p, value=r.value_for(p)) for p in periods]
        for r in records
    }


def category_total(series: Sequence[SeriesPoint]) -> float:
    """Return the sum of a series' values."""
    return sum(pt.value for pt in series)


def rank_top(series_map: Mapping[str, Sequence[SeriesPoint]], n: int) -> list[str]:
    """Return the top `n` dishes by total sales.

    Sorting is stable, so ties keep the order of `series_map`.

    Args:
        series_map: Dish → series, in source order.
        n: Number of dishes to keep.

    Returns:
        Dish names sorted by total descending; empty for empty input or n <= 0.
    """
    if n <= 0 or not series_map:
        return []
    totals = [(name, category_total(s)) for name, s in series_map.items()]
    ranked = sorted(totals, key=lambda item: item[1], reverse=True)
    return [name for name, _ in ranked[:n]]


def series_frame(
    series_map: Mapping[str, Sequence[SeriesPoint]],
    categories: Sequence[str] | None = None,
) -> pd.DataFrame:
    """Return a long DataFrame of dish series for charts and tables.

    Args:
        series_map: Dish → series.
        categories: Optional subset (and order) of dishes to include.

    Returns:
        DataFrame with columns: `category`, `period`, `value`.
    """
    names = list(series_map) if categories is None else [c for c in categories if c in series_map]
    rows = [
        {"category": name, "period": pt.period, "value": pt.value}
        for name in names
        for pt in series_map[name]
    ]
    return pd.DataFrame(rows, columns=["category", "period", "value"])
