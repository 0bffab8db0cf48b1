"""Altair chart builders for the dashboard.

Each function takes aggregation outputs and returns an `alt.Chart`; the
Streamlit app renders them with `st.altair_chart`, and `to_dict()` gives the
Vega-Lite spec.
"""
from __future__ import annotations

from typing import Mapping, Sequence

import altair as alt
import pandas as pd

from dish_sales.aggregate.build_series import category_total, series_frame
from dish_sales.aggregate.trends import growth_frame
from dish_sales.models import GrowthClass, GrowthPoint, SeriesPoint

LINE_COLOR = "#3B82F6"
GROWTH_COLORS = {
    GrowthClass.POSITIVE.value: "#4CAF50",
    GrowthClass.NEGATIVE.value: "#F44336",
    GrowthClass.NEUTRAL.value: "#9E9E9E",
}
COMPARISON_PALETTE = ["#3B82F6", "#10B981", "#EF4444", "#F59E0B", "#8B5CF6"]


def sales_line_chart(category: str, series: Sequence[SeriesPoint], height: int = 280) -> alt.Chart:
    """Monthly sales line for one dish."""
    df = series_frame({category: list(series)})
    periods = df["period"].tolist()
    return (
        alt.Chart(df, title=f"{category} - Monthly Sales")
        .mark_line(point=True, color=LINE_COLOR)
        .encode(
            x=alt.X("period:N", sort=periods, title="Month"),
            y=alt.Y("value:Q", title="Sales"),
            tooltip=[alt.Tooltip("period:N", title="Month"), alt.Tooltip("value:Q", title="Sales")],
        )
        .properties(height=height)
    )


def growth_bar_chart(category: str, growth: Sequence[GrowthPoint], height: int = 280) -> alt.Chart:
    """Growth-rate bars for one dish, coloured by sign."""
    df = growth_frame(growth)
    periods = df["period"].tolist()
    return (
        alt.Chart(df, title=f"{category} - Growth Rate")
        .mark_bar(cornerRadiusTopLeft=4, cornerRadiusTopRight=4)
        .encode(
            x=alt.X("period:N", sort=periods, title="Month"),
            y=alt.Y("growth:Q", title="Growth Rate (%)"),
            color=alt.Color(
                "growth_class:N",
                scale=alt.Scale(domain=list(GROWTH_COLORS), range=list(GROWTH_COLORS.values())),
                legend=None,
            ),
            tooltip=[
                alt.Tooltip("period:N", title="Month"),
                alt.Tooltip("growth:Q", title="Growth Rate (%)", format=".1f"),
            ],
        )
        .properties(height=height)
    )


def top_comparison_chart(
    series_map: Mapping[str, Sequence[SeriesPoint]],
    top: Sequence[str],
    periods: Sequence[str],
    height: int = 380,
) -> alt.Chart:
    """Monthly sales lines for the top dishes on one axis."""
    df = series_frame(series_map, categories=top)
    names = list(df["category"].unique())
    palette = [COMPARISON_PALETTE[i % len(COMPARISON_PALETTE)] for i in range(len(names))]
    return (
        alt.Chart(df, title=f"Top {len(names)} Dishes Comparison")
        .mark_line(point=True, strokeWidth=2)
        .encode(
            x=alt.X("period:N", sort=list(periods), title="Month"),
            y=alt.Y("value:Q", title="Sales"),
            color=alt.Color("category:N", title="Dish", scale=alt.Scale(domain=names, range=palette)),
            tooltip=["category:N", "period:N", "value:Q"],
        )
        .properties(height=height)
    )


def total_sales_chart(
    series_map: Mapping[str, Sequence[SeriesPoint]],
    top: Sequence[str],
    height: int = 380,
) -> alt.Chart:
    """Horizontal bars of total sales for the top dishes."""
    df = pd.DataFrame(
        [{"dish": name, "total_sales": category_total(series_map[name])} for name in top if name in series_map],
        columns=["dish", "total_sales"],
    )
    return (
        alt.Chart(df, title="Total Sales by Dish")
        .mark_bar(color=LINE_COLOR, cornerRadiusTopRight=4, cornerRadiusBottomRight=4)
        .encode(
            x=alt.X("total_sales:Q", title="Total Sales"),
            y=alt.Y("dish:N", sort=list(df["dish"]), title=None),
            tooltip=["dish:N", "total_sales:Q"],
        )
        .properties(height=height)
    )
