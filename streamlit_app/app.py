from __future__ import annotations

import logging

import pandas as pd
import streamlit as st

from dish_sales.aggregate.trends import comparison_labels, comparison_table, detail_table, trend_class
from dish_sales.charts import (
    growth_bar_chart,
    sales_line_chart,
    top_comparison_chart,
    total_sales_chart,
)
from dish_sales.config import get_settings
from dish_sales.errors import ExportFailure, LoadFailure
from dish_sales.logging_config import configure_logging
from dish_sales.models import GrowthClass
from dish_sales.snapshot import (
    VIEW_COMPARISON,
    VIEW_INDIVIDUAL,
    DashboardState,
    SalesSnapshot,
    load_snapshot,
    run_export,
)

log = logging.getLogger("dish_sales.app")

# =====================================================
# Page config
# =====================================================
st.set_page_config(page_title="Food Sales Analysis", layout="wide")
st.title("🍽️ Food Sales Analysis Dashboard")

settings = get_settings()
configure_logging(settings.log_path)

# =====================================================
# Data (loaded once per session)
# =====================================================
if "snapshot" not in st.session_state:
    try:
        with st.spinner("Loading data..."):
            st.session_state.snapshot = load_snapshot(settings)
    except LoadFailure as exc:
        log.error("Error loading data: %s", exc)
        st.error(f"Loading data failed: {exc}")
        st.stop()

snapshot: SalesSnapshot = st.session_state.snapshot

if snapshot.empty:
    st.warning("No data available in the sales sheet.")
    st.stop()

if "ui_state" not in st.session_state:
    st.session_state.ui_state = DashboardState.for_snapshot(snapshot)

state: DashboardState = st.session_state.ui_state


def center_dataframe(df: pd.DataFrame):
    """Center-align column headers and values for display."""
    return (
        df.style
        .set_properties(**{"text-align": "center"})
        .set_table_styles(
            [{"selector": "th", "props": [("text-align", "center")]}]
        )
    )


TREND_STYLES = {
    GrowthClass.POSITIVE: "color: #16a34a; font-weight: 600",
    GrowthClass.NEGATIVE: "color: #dc2626; font-weight: 600",
    GrowthClass.NEUTRAL: "font-weight: 600",
}


def color_trend(df: pd.DataFrame):
    """Center the comparison table and colour its trend column by sign."""
    labels = comparison_labels(snapshot.periods)
    classes = {row.category: trend_class(row) for row in snapshot.summaries}
    styles = [TREND_STYLES[classes[d]] for d in df[labels["dish"]]]
    return center_dataframe(df).apply(lambda _: styles, subset=[labels["trend"]])


# =====================================================
# Controls
# =====================================================
c1, c2, c3 = st.columns(3)

with c1:
    labels = {VIEW_INDIVIDUAL: "Individual Dish", VIEW_COMPARISON: "Comparison"}
    mode = st.radio(
        "View",
        list(labels),
        format_func=labels.get,
        index=list(labels).index(state.view_mode),
        horizontal=True,
    )
    state.set_view_mode(mode)

with c2:
    if state.view_mode == VIEW_INDIVIDUAL:
        choice = st.selectbox(
            "Dish",
            snapshot.categories,
            index=snapshot.categories.index(state.selected_category),
        )
        state.select_category(choice)

with c3:
    if st.button(
        "Exporting..." if state.exporting else "Export to Excel",
        disabled=state.exporting,
    ):
        try:
            written = run_export(state, snapshot, settings.export_path)
        except ExportFailure as exc:
            st.error(f"Error exporting to Excel: {exc}")
        else:
            if written is not None:
                st.success(f"Saved {written}")
                st.download_button(
                    "Download workbook",
                    data=written.read_bytes(),
                    file_name=written.name,
                    mime="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
                )

st.divider()

# =====================================================
# SECTION 1 — INDIVIDUAL DISH
# =====================================================
if state.view_mode == VIEW_INDIVIDUAL and state.selected_category:
    dish = state.selected_category
    series = snapshot.series[dish]

    st.altair_chart(sales_line_chart(dish, series), width="stretch")
    st.altair_chart(growth_bar_chart(dish, snapshot.growth_for(dish)), width="stretch")

    st.subheader(f"{dish} - Sales Data")
    st.dataframe(center_dataframe(detail_table(series)), width="stretch", hide_index=True)

# =====================================================
# SECTION 2 — TOP DISHES COMPARISON
# =====================================================
if state.view_mode == VIEW_COMPARISON:
    if not snapshot.top:
        st.info("No dishes to compare.")
    else:
        st.altair_chart(
            top_comparison_chart(snapshot.series, snapshot.top, snapshot.periods),
            width="stretch",
        )
        st.altair_chart(total_sales_chart(snapshot.series, snapshot.top), width="stretch")

        st.subheader("Sales Comparison Table")
        st.dataframe(
            color_trend(comparison_table(snapshot.series, snapshot.top, snapshot.periods)),
            width="stretch",
            hide_index=True,
        )

# =====================================================
# Footer
# =====================================================
if snapshot.source is not None:
    st.caption(f"Source: {snapshot.source} • {len(snapshot.categories)} dishes × {len(snapshot.periods)} months")
