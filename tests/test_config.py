from __future__ import annotations

from pathlib import Path

import pytest

from dish_sales.config import get_settings

ENV_VARS = ["SALES_WORKBOOK", "SALES_SHEET", "CATEGORY_COLUMN", "TOP_N", "EXPORT_PATH", "LOG_PATH"]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = get_settings()
    assert s.sheet_name == "DISH"
    assert s.category_column == "Dish"
    assert s.top_n == 5
    assert s.export_path == Path("exports/Food_Sales_Analysis.xlsx")


def test_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SALES_WORKBOOK", "/data/sales.xlsx")
    monkeypatch.setenv("TOP_N", " 3 ")
    monkeypatch.setenv("CATEGORY_COLUMN", "Dish ")
    s = get_settings()
    assert s.workbook_path == Path("/data/sales.xlsx")
    assert s.top_n == 3
    assert s.category_column == "Dish"


@pytest.mark.parametrize("value", ["0", "-2", "five"])
def test_invalid_top_n_raises(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    monkeypatch.setenv("TOP_N", value)
    with pytest.raises(RuntimeError):
        get_settings()
