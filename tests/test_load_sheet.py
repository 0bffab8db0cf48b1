from __future__ import annotations

from pathlib import Path
from typing import Callable

import pandas as pd
import pytest

from dish_sales.errors import LoadFailure
from dish_sales.ingest.load_sheet import frame_to_sheet, load_sales_sheet, read_sales_frame


def test_load_sales_sheet_reads_periods_and_dishes(menu_workbook: Path) -> None:
    sheet = load_sales_sheet(menu_workbook, "DISH", "Dish")
    assert sheet.periods == ["Jan", "Feb", "Mar"]
    assert sheet.categories == ["Pizza", "Salad", "Soup", "Burger", "Pasta", "Tacos"]
    assert sheet.category_column == "Dish "


def test_load_sales_sheet_normalizes_empty_and_text_cells(menu_workbook: Path) -> None:
    sheet = load_sales_sheet(menu_workbook, "DISH", "Dish")
    by_name = {r.name: r for r in sheet.records}
    assert by_name["Salad"].values == {"Jan": 50.0, "Feb": 0.0, "Mar": 40.0}
    assert by_name["Burger"].value_for("Mar") == 0.0


def test_missing_file_is_load_failure(tmp_path: Path) -> None:
    with pytest.raises(LoadFailure):
        read_sales_frame(tmp_path / "nope.xlsx", "DISH")


def test_missing_sheet_is_load_failure(menu_workbook: Path) -> None:
    with pytest.raises(LoadFailure):
        read_sales_frame(menu_workbook, "MENU")


def test_not_a_workbook_is_load_failure(tmp_path: Path) -> None:
    path = tmp_path / "broken.xlsx"
    path.write_text("not a zip file", encoding="utf-8")
    with pytest.raises(LoadFailure):
        read_sales_frame(path, "DISH")


def test_missing_category_column_is_load_failure() -> None:
    df = pd.DataFrame({"Item": ["Pizza"], "Jan": [1]})
    with pytest.raises(LoadFailure):
        frame_to_sheet(df, "Dish")


def test_no_period_columns_is_load_failure() -> None:
    df = pd.DataFrame({"Dish": ["Pizza"], "Unnamed: 1": [None]})
    with pytest.raises(LoadFailure):
        frame_to_sheet(df, "Dish")


def test_blank_names_skipped_and_duplicates_keep_first() -> None:
    df = pd.DataFrame({
        "Dish": ["Pizza", None, "  ", "Pizza", "Soup"],
        "Jan": [1, 2, 3, 4, 5],
    })
    sheet = frame_to_sheet(df, "Dish")
    assert sheet.categories == ["Pizza", "Soup"]
    assert sheet.records[0].value_for("Jan") == 1.0


def test_sheet_without_rows_is_empty_not_an_error() -> None:
    df = pd.DataFrame({"Dish": [], "Jan": [], "Feb": []})
    sheet = frame_to_sheet(df, "Dish")
    assert sheet.records == []
    assert sheet.periods == ["Jan", "Feb"]


def test_boolean_cells_load_as_zero(make_workbook: Callable[..., Path]) -> None:
    path = make_workbook([["Dish", "Jan", "Feb"], ["A", True, 5], ["B", 3, False]])
    sheet = load_sales_sheet(path, "DISH", "Dish")
    assert sheet.records[0].values == {"Jan": 0.0, "Feb": 5.0}
    assert sheet.records[1].values == {"Jan": 3.0, "Feb": 0.0}
