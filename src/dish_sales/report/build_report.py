"""Build and write the analysis workbook.

The workbook has three kinds of sheets:
- `All Dishes Overview`: every dish × every month
- one sheet per top dish: Month / Sales / Growth Rate (%)
- `Sales Summary`: totals, averages and trends, total descending

The whole workbook is serialized in memory before anything touches disk, and
the target file is replaced atomically, so a failed export leaves no file.
"""
from __future__ import annotations

import io
import logging
import os
import re
import tempfile
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Sequence

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from openpyxl.worksheet.worksheet import Worksheet

from dish_sales.aggregate.trends import growth_rates
from dish_sales.errors import ExportFailure

if TYPE_CHECKING:
    from dish_sales.snapshot import SalesSnapshot

log = logging.getLogger(__name__)

CREATOR = "Food Sales Dashboard"
OVERVIEW_SHEET = "All Dishes Overview"
SUMMARY_SHEET = "Sales Summary"

OVERVIEW_CATEGORY_HEADER = "Dish"
DETAIL_HEADERS = ["Month", "Sales", "Growth Rate (%)"]
SUMMARY_HEADERS = [
    "Dish",
    "Total Sales",
    "Average Monthly Sales",
    "Overall Trend (%)",
    "First Month Sales",
    "Last Month Sales",
]
TREND_COLUMN = 4  # "Overall Trend (%)"

HEADER_FONT = Font(bold=True)
HEADER_FILL = PatternFill(start_color="FFD3D3D3", end_color="FFD3D3D3", fill_type="solid")
TREND_UP_FONT = Font(color="FF008000")
TREND_DOWN_FONT = Font(color="FFFF0000")

MAX_SHEET_TITLE = 30
_INVALID_TITLE_CHARS = re.compile(r"[\[\]:*?/\\]")


def _number(value: float) -> int | float:
    """Return whole numbers as int."""
    return int(value) if float(value).is_integer() else value


def _style_header(ws: Worksheet) -> None:
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL


def _trim_title(title: str) -> str:
    # Excel titles may not begin or end with an apostrophe
    return title.strip().strip("'").strip()


def sheet_title(name: str, taken: set[str]) -> str:
    """Return a valid, unused worksheet title derived from a dish name.

    Args:
        name: Dish name.
        taken: Lower-cased titles already in the workbook; updated in place.

    Returns:
        Title with Excel-forbidden characters replaced, truncated to 30
        characters, suffixed with `` (n)`` when needed to stay unique.
    """
    base = _trim_title(_trim_title(_INVALID_TITLE_CHARS.sub("_", name))[:MAX_SHEET_TITLE]) or "Sheet"
    title = base
    n = 2
    while title.lower() in taken:
        suffix = f" ({n})"
        title = _trim_title(base[: MAX_SHEET_TITLE - len(suffix)]) + suffix
        n += 1
    taken.add(title.lower())
    return title


def _write_overview(ws: Worksheet, snapshot: "SalesSnapshot") -> None:
    ws.append([OVERVIEW_CATEGORY_HEADER, *snapshot.periods])
    for name in snapshot.categories:
        ws.append([name, *(_number(pt.value) for pt in snapshot.series[name])])
    _style_header(ws)


def _write_detail(ws: Worksheet, series: Sequence[Any]) -> None:
    ws.append(DETAIL_HEADERS)
    growth = growth_rates(series)
    for i, pt in enumerate(series):
        rate: Any = "N/A" if i == 0 else growth[i - 1].display
        ws.append([pt.period, _number(pt.value), rate])
    _style_header(ws)


def _write_summary(ws: Worksheet, snapshot: "SalesSnapshot") -> None:
    ws.append(SUMMARY_HEADERS)
    for row in snapshot.summaries:
        ws.append([
            row.category,
            _number(row.total),
            round(row.average, 1),
            round(row.trend, 1),
            _number(row.first),
            _number(row.last),
        ])
        trend_cell = ws.cell(row=ws.max_row, column=TREND_COLUMN)
        trend_cell.font = TREND_UP_FONT if row.trend >= 0 else TREND_DOWN_FONT
    _style_header(ws)


def build_workbook(snapshot: "SalesSnapshot") -> Workbook:
    """Build the analysis workbook for a snapshot.

    Args:
        snapshot: Loaded data and derived aggregates.

    Returns:
        openpyxl Workbook with the overview, one sheet per top dish, and
        the summary sheet, in that order.
    """
    wb = Workbook()
    now = datetime.now()
    wb.properties.creator = CREATOR
    wb.properties.lastModifiedBy = CREATOR
    wb.properties.created = now
    wb.properties.modified = now

    overview = wb.active
    overview.title = OVERVIEW_SHEET
    _write_overview(overview, snapshot)

    taken = {OVERVIEW_SHEET.lower(), SUMMARY_SHEET.lower()}
    for name in snapshot.top:
        ws = wb.create_sheet(sheet_title(name, taken))
        _write_detail(ws, snapshot.series[name])

    _write_summary(wb.create_sheet(SUMMARY_SHEET), snapshot)
    return wb


def workbook_to_bytes(wb: Workbook) -> bytes:
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def export_report(snapshot: "SalesSnapshot", path: Path) -> Path:
    """Write the analysis workbook to `path`.

    Args:
        snapshot: Data to export.
        path: Target .xlsx path; parent directories are created.

    Returns:
        The written path.

    Raises:
        ExportFailure: if building or writing the workbook fails. No file
            (partial or temporary) is left behind in that case.
    """
    path = Path(path)
    log.info("Exporting analysis workbook to %s", path)

    try:
        payload = workbook_to_bytes(build_workbook(snapshot))
    except Exception as e:
        log.exception("Building the analysis workbook failed")
        raise ExportFailure(f"Error building workbook: {e}") from e

    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            dir=path.parent, prefix=".export-", suffix=".xlsx", delete=False
        ) as tmp:
            tmp_name = tmp.name
            tmp.write(payload)
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        log.exception("Writing %s failed", path)
        raise ExportFailure(f"Error writing {path}: {e}") from e

    log.info("Export complete: %s (%d bytes, %d top dishes)", path, len(payload), len(snapshot.top))
    return path
