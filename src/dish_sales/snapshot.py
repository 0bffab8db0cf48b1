"""Loaded data, derived aggregates, and the dashboard's transient UI state.

`SalesSnapshot` is rebuilt in full on every (re)load and never mutated.
`DashboardState` holds what the user is looking at plus the export-in-flight
flag, kept apart from the data.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from dish_sales.aggregate.build_series import SeriesMap, build_series, rank_top
from dish_sales.aggregate.trends import growth_rates, summary_table
from dish_sales.config import Settings
from dish_sales.ingest.load_sheet import load_sales_sheet
from dish_sales.models import GrowthPoint, SalesSheet, SummaryRow
from dish_sales.report.build_report import export_report

log = logging.getLogger(__name__)

VIEW_INDIVIDUAL = "individual"
VIEW_COMPARISON = "comparison"
VIEW_MODES = (VIEW_INDIVIDUAL, VIEW_COMPARISON)


@dataclass(frozen=True)
class SalesSnapshot:
    """Immutable view of one loaded sheet and everything derived from it.

    Attributes:
        sheet: The validated source sheet.
        series: Dish → series, in sheet order.
        top: Top-N dish names by total sales.
        summaries: Summary rows for every dish, total descending.
        source: Workbook the sheet was read from, if any.
    """
    sheet: SalesSheet
    series: SeriesMap
    top: list[str]
    summaries: list[SummaryRow]
    source: Path | None = None

    @property
    def categories(self) -> list[str]:
        return self.sheet.categories

    @property
    def periods(self) -> list[str]:
        return list(self.sheet.periods)

    @property
    def empty(self) -> bool:
        return not self.sheet.records

    def growth_for(self, category: str) -> list[GrowthPoint]:
        """Return growth points for a dish (empty for unknown dishes)."""
        return growth_rates(self.series.get(category, []))


def build_snapshot(sheet: SalesSheet, top_n: int, source: Path | None = None) -> SalesSnapshot:
    """Derive series, ranking and summaries from a validated sheet."""
    series = build_series(sheet.records, sheet.periods)
    return SalesSnapshot(
        sheet=sheet,
        series=series,
        top=rank_top(series, top_n),
        summaries=summary_table(series),
        source=source,
    )


def load_snapshot(settings: Settings) -> SalesSnapshot:
    """Load the configured workbook and build a snapshot.

    Raises:
        LoadFailure: if the workbook cannot be read or lacks the expected layout.
    """
    sheet = load_sales_sheet(settings.workbook_path, settings.sheet_name, settings.category_column)
    snap = build_snapshot(sheet, settings.top_n, source=settings.workbook_path)
    log.info("Snapshot ready: %d dishes, top=%s", len(snap.categories), snap.top)
    return snap


@dataclass
class DashboardState:
    """User-facing selections and the export-in-flight flag."""
    categories: list[str] = field(default_factory=list)
    selected_category: str | None = None
    view_mode: str = VIEW_INDIVIDUAL
    exporting: bool = False

    @classmethod
    def for_snapshot(cls, snapshot: SalesSnapshot) -> "DashboardState":
        cats = snapshot.categories
        return cls(categories=cats, selected_category=cats[0] if cats else None)

    def select_category(self, name: str) -> None:
        if name not in self.categories:
            raise ValueError(f"Unknown dish: {name!r}")
        self.selected_category = name

    def set_view_mode(self, mode: str) -> None:
        if mode not in VIEW_MODES:
            raise ValueError(f"view_mode must be one of {VIEW_MODES}, got {mode!r}")
        self.view_mode = mode


def run_export(state: DashboardState, snapshot: SalesSnapshot, path: Path) -> Path | None:
    """Export the analysis workbook unless another export is in flight.

    Args:
        state: Dashboard state carrying the `exporting` flag.
        snapshot: Data to export.
        path: Target workbook path.

    Returns:
        The written path, or None when the request was ignored.

    Raises:
        ExportFailure: if the workbook could not be written. The flag is
            reset either way.
    """
    if state.exporting:
        log.warning("Export already in progress; ignoring request.")
        return None

    state.exporting = True
    try:
        return export_report(snapshot, path)
    finally:
        state.exporting = False
