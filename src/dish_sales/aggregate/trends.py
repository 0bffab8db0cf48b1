"""Growth rates, trend classification and summary tables.

Percentages are kept at full precision; rounding to one decimal happens only
where values are rendered (`GrowthPoint.display`, the display tables below and
the exported workbook).
"""
from __future__ import annotations

from typing import Mapping, Sequence

import pandas as pd

from dish_sales.aggregate.build_series import category_total
from dish_sales.models import GrowthClass, GrowthPoint, SeriesPoint, SummaryRow


def _pct_change(previous: float, current: float) -> float:
    return (current - previous) / previous * 100.0


def growth_rates(series: Sequence[SeriesPoint]) -> list[GrowthPoint]:
    """Return period-over-period growth for every period after the first.

    A previous value of zero (or less) yields growth ``0.0`` with
    ``has_baseline=False``.

    Args:
        series: One dish's series in period order.

    Returns:
        List of `GrowthPoint`, length ``len(series) - 1`` (empty for short series).
    """
    out: list[GrowthPoint] = []
    for prev, cur in zip(series, series[1:]):
        if prev.value > 0:
            out.append(GrowthPoint(period=cur.period, growth=_pct_change(prev.value, cur.value)))
        else:
            out.append(GrowthPoint(period=cur.period, growth=0.0, has_baseline=False))
    return out


def color_for_growth(value: float) -> GrowthClass:
    """Classify a percentage as positive, negative or neutral."""
    if value > 0:
        return GrowthClass.POSITIVE
    if value < 0:
        return GrowthClass.NEGATIVE
    return GrowthClass.NEUTRAL


def summary_row(category: str, series: Sequence[SeriesPoint]) -> SummaryRow:
    """Compute the summary row for one dish.

    The average divides by the number of periods (zero months included). The
    trend compares the last period to the first and is ``0.0`` when the first
    value is zero.

    Args:
        category: Dish name.
        series: The dish's series in period order.

    Returns:
        `SummaryRow` for the dish.
    """
    total = category_total(series)
    count = len(series)
    first = series[0].value if series else 0.0
    last = series[-1].value if series else 0.0
    trend = _pct_change(first, last) if first > 0 else 0.0

    return SummaryRow(
        category=category,
        total=total,
        average=total / count if count else 0.0,
        trend=trend,
        first=first,
        last=last,
    )


def summary_table(series_map: Mapping[str, Sequence[SeriesPoint]]) -> list[SummaryRow]:
    """Return summary rows for all dishes, sorted by total descending (stable)."""
    rows = [summary_row(name, s) for name, s in series_map.items()]
    return sorted(rows, key=lambda r: r.total, reverse=True)


def trend_class(row: SummaryRow) -> GrowthClass:
    """Classify a summary row's trend; a zero first month is always neutral."""
    if row.first <= 0:
        return GrowthClass.NEUTRAL
    return color_for_growth(row.trend)


def growth_frame(growth: Sequence[GrowthPoint]) -> pd.DataFrame:
    """Return growth points as a DataFrame for charting.

    Returns:
        DataFrame with columns: `period`, `growth` (one decimal),
        `growth_class`.
    """
    rows = [
        {
            "period": g.period,
            "growth": g.display,
            "growth_class": color_for_growth(g.display).value,
        }
        for g in growth
    ]
    return pd.DataFrame(rows, columns=["period", "growth", "growth_class"])


def detail_table(series: Sequence[SeriesPoint]) -> pd.DataFrame:
    """Return the per-dish Month / Sales / Growth Rate table.

    Growth is shown as ``"N/A"`` for the first month and for months whose
    previous month had no sales.

    Returns:
        DataFrame with columns: `Month`, `Sales`, `Growth Rate`.
    """
    growth_by_period = {g.period: g for g in growth_rates(series)}
    rows = []
    for pt in series:
        g = growth_by_period.get(pt.period)
        label = f"{g.display:.1f}%" if g is not None and g.has_baseline else "N/A"
        rows.append({"Month": pt.period, "Sales": pt.value, "Growth Rate": label})
    return pd.DataFrame(rows, columns=["Month", "Sales", "Growth Rate"])


def _free_label(label: str, taken: set[str]) -> str:
    candidate = label
    n = 2
    while candidate in taken:
        candidate = f"{label} ({n})"
        n += 1
    taken.add(candidate)
    return candidate


def comparison_labels(periods: Sequence[str]) -> dict[str, str]:
    """Return the `dish`, `total` and `trend` column labels for `periods`.

    Labels are ``Dish``, ``Total`` and ``Trend (%)`` unless a period already
    uses one, in which case a `` (n)`` suffix keeps every column unique.
    """
    taken = set(periods)
    return {
        "dish": _free_label("Dish", taken),
        "total": _free_label("Total", taken),
        "trend": _free_label("Trend (%)", taken),
    }


def comparison_table(
    series_map: Mapping[str, Sequence[SeriesPoint]],
    categories: Sequence[str],
    periods: Sequence[str],
) -> pd.DataFrame:
    """Return the comparison table for the given dishes.

    Args:
        series_map: Dish → series.
        categories: Dishes to include, in display order (usually the top N).
        periods: Period labels, used as column headers.

    Returns:
        DataFrame with a dish column, one column per period, then total and
        trend (one decimal) columns, labelled by `comparison_labels`.
    """
    labels = comparison_labels(periods)
    names = [name for name in categories if name in series_map]

    df = pd.DataFrame(
        [[pt.value for pt in series_map[name]] for name in names],
        columns=list(periods),
    )
    summaries = [summary_row(name, series_map[name]) for name in names]
    df.insert(0, labels["dish"], names)
    df[labels["total"]] = [s.total for s in summaries]
    df[labels["trend"]] = [round(s.trend, 1) for s in summaries]
    return df
