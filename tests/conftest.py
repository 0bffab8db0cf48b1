from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest
from openpyxl import Workbook

from dish_sales.models import CategoryRecord, SalesSheet
from dish_sales.snapshot import SalesSnapshot, build_snapshot


@pytest.fixture
def make_workbook(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing `rows` (header first) to a one-sheet workbook."""
    def _make(rows: list[list[Any]], sheet_name: str = "DISH", name: str = "menu.xlsx") -> Path:
        wb = Workbook()
        ws = wb.active
        ws.title = sheet_name
        for row in rows:
            ws.append(row)
        path = tmp_path / name
        wb.save(path)
        return path

    return _make


@pytest.fixture
def menu_workbook(make_workbook: Callable[..., Path]) -> Path:
    # Header has a trailing space and a blank fifth header cell, like the
    # real source sheet.
    return make_workbook([
        ["Dish ", "Jan", "Feb", "Mar", None],
        ["Pizza", 100, 150, 120, "note"],
        ["Salad", 50, None, 40, None],
        ["Soup", 0, 30, 60, None],
        ["Burger", 80, 80, "n/a", None],
        ["Pasta", 10, 20, 30, None],
        ["Tacos", 5, 5, 5, None],
    ])


@pytest.fixture
def pizza_salad_sheet() -> SalesSheet:
    return SalesSheet(
        category_column="Dish",
        periods=["Jan", "Feb"],
        records=[
            CategoryRecord(name="Pizza", values={"Jan": 100, "Feb": 150}),
            CategoryRecord(name="Salad", values={"Jan": 50, "Feb": 40}),
        ],
    )


@pytest.fixture
def pizza_salad_snapshot(pizza_salad_sheet: SalesSheet) -> SalesSnapshot:
    return build_snapshot(pizza_salad_sheet, top_n=5)
