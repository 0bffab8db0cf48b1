"""Read the dish × month sales sheet into a validated `SalesSheet`.

`read_sales_frame` wraps pandas' Excel reader and turns I/O problems into
`LoadFailure`; `frame_to_sheet` fixes the schema (dish column + ordered period
columns) and normalizes cells, so nothing downstream reads raw rows.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pandas as pd
from pydantic import ValidationError

from dish_sales.errors import LoadFailure
from dish_sales.models import CategoryRecord, SalesSheet

log = logging.getLogger(__name__)

# pandas names header cells that are empty "Unnamed: <n>"
UNNAMED_PREFIX = "Unnamed:"


def read_sales_frame(path: Path, sheet_name: str) -> pd.DataFrame:
    """Read one sheet of an Excel workbook into a DataFrame.

    Args:
        path: Workbook path (.xlsx).
        sheet_name: Name of the sheet holding the dish table.

    Returns:
        pandas.DataFrame with the sheet's header row as columns.

    Raises:
        LoadFailure: if the file is missing, unreadable, or lacks the sheet.
    """
    path = Path(path)
    if not path.exists():
        raise LoadFailure(f"Sales workbook not found: {path}")

    try:
        df = pd.read_excel(path, sheet_name=sheet_name, engine="openpyxl")
    except ValueError as e:
        # pandas raises ValueError("Worksheet named ... not found")
        raise LoadFailure(f"Cannot read sheet {sheet_name!r} from {path}: {e}") from e
    except Exception as e:
        raise LoadFailure(f"Cannot read workbook {path}: {e}") from e

    log.info("Read sheet %r from %s: %d rows x %d columns", sheet_name, path, len(df), len(df.columns))
    return df


def _find_category_column(columns: list[Any], category_column: str) -> Any:
    wanted = category_column.strip()
    for col in columns:
        if str(col).strip() == wanted:
            return col
    return None


def _is_period_column(col: Any, category_col: Any) -> bool:
    if col == category_col:
        return False
    label = str(col).strip()
    return bool(label) and not label.startswith(UNNAMED_PREFIX)


def _coerce_cells(frame: pd.DataFrame) -> pd.DataFrame:
    """Return numeric cell values; booleans, text and blanks become 0.

    Booleans are dropped before `pd.to_numeric`, which would otherwise read
    TRUE as 1, so the result agrees with `models.normalize_value`.
    """
    cells = frame.astype(object).map(lambda v: None if pd.api.types.is_bool(v) else v)
    return cells.apply(pd.to_numeric, errors="coerce").fillna(0.0)


def frame_to_sheet(df: pd.DataFrame, category_column: str) -> SalesSheet:
    """Validate a raw sheet DataFrame and convert it into a `SalesSheet`.

    Periods are every column other than the dish column and pandas' unnamed
    placeholders, in sheet order. Cells that are empty or not numeric become 0.
    Rows without a dish name are skipped; repeated dish names keep the first
    row.

    Args:
        df: DataFrame as returned by `read_sales_frame`.
        category_column: Dish column header, compared after stripping spaces.

    Returns:
        Validated `SalesSheet` (possibly with no records).

    Raises:
        LoadFailure: if the dish column or all period columns are missing.
    """
    columns = list(df.columns)
    cat_col = _find_category_column(columns, category_column)
    if cat_col is None:
        raise LoadFailure(
            f"Column {category_column!r} not found. Available columns: {[str(c) for c in columns]}"
        )

    period_cols = [c for c in columns if _is_period_column(c, cat_col)]
    if not period_cols:
        raise LoadFailure("Sheet has no period columns next to the dish column.")

    periods = [str(c).strip() for c in period_cols]

    values = _coerce_cells(df[period_cols])
    values.columns = periods

    records: list[CategoryRecord] = []
    seen: set[str] = set()
    skipped_blank = 0

    for idx, raw_name in df[cat_col].items():
        if pd.isna(raw_name) or not str(raw_name).strip():
            skipped_blank += 1
            continue
        name = str(raw_name).strip()
        if name in seen:
            log.warning("Duplicate dish %r at row %s ignored; keeping the first row.", name, idx)
            continue
        seen.add(name)
        records.append(CategoryRecord(name=name, values=values.loc[idx].to_dict()))

    if skipped_blank:
        log.info("Skipped %d rows without a dish name", skipped_blank)

    try:
        sheet = SalesSheet(category_column=str(cat_col), periods=periods, records=records)
    except ValidationError as e:
        raise LoadFailure(f"Sales sheet failed validation: {e}") from e

    log.info("Loaded %d dishes over %d periods", len(sheet.records), len(sheet.periods))
    return sheet


def load_sales_sheet(path: Path, sheet_name: str, category_column: str) -> SalesSheet:
    """Read and validate the sales sheet in one step."""
    return frame_to_sheet(read_sales_frame(path, sheet_name), category_column)
