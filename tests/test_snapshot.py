from __future__ import annotations

from pathlib import Path

import pytest

from dish_sales.config import Settings
from dish_sales.errors import ExportFailure, LoadFailure
from dish_sales.snapshot import (
    VIEW_COMPARISON,
    DashboardState,
    SalesSnapshot,
    load_snapshot,
    run_export,
)


def _settings(workbook: Path, tmp_path: Path, top_n: int = 5) -> Settings:
    return Settings(
        workbook_path=workbook,
        sheet_name="DISH",
        category_column="Dish",
        top_n=top_n,
        export_path=tmp_path / "out.xlsx",
        log_path=tmp_path / "dashboard.log",
    )


def test_snapshot_derives_series_top_and_summaries(pizza_salad_snapshot: SalesSnapshot) -> None:
    snap = pizza_salad_snapshot
    assert snap.categories == ["Pizza", "Salad"]
    assert snap.periods == ["Jan", "Feb"]
    assert snap.top == ["Pizza", "Salad"]
    assert [r.category for r in snap.summaries] == ["Pizza", "Salad"]
    assert snap.growth_for("Salad")[0].display == -20.0
    assert snap.growth_for("Unknown") == []
    assert not snap.empty


def test_load_snapshot_uses_settings(menu_workbook: Path, tmp_path: Path) -> None:
    snap = load_snapshot(_settings(menu_workbook, tmp_path, top_n=2))
    assert snap.top == ["Pizza", "Burger"]
    assert snap.source == menu_workbook


def test_load_snapshot_propagates_load_failure(tmp_path: Path) -> None:
    with pytest.raises(LoadFailure):
        load_snapshot(_settings(tmp_path / "missing.xlsx", tmp_path))


def test_dashboard_state_defaults_to_first_dish(pizza_salad_snapshot: SalesSnapshot) -> None:
    state = DashboardState.for_snapshot(pizza_salad_snapshot)
    assert state.selected_category == "Pizza"
    assert state.view_mode == "individual"
    assert not state.exporting


def test_dashboard_state_rejects_unknown_selections(pizza_salad_snapshot: SalesSnapshot) -> None:
    state = DashboardState.for_snapshot(pizza_salad_snapshot)
    state.select_category("Salad")
    state.set_view_mode(VIEW_COMPARISON)
    assert (state.selected_category, state.view_mode) == ("Salad", VIEW_COMPARISON)

    with pytest.raises(ValueError):
        state.select_category("Ramen")
    with pytest.raises(ValueError):
        state.set_view_mode("grid")


def test_run_export_writes_and_resets_flag(pizza_salad_snapshot: SalesSnapshot, tmp_path: Path) -> None:
    state = DashboardState.for_snapshot(pizza_salad_snapshot)
    out = run_export(state, pizza_salad_snapshot, tmp_path / "a.xlsx")
    assert out == tmp_path / "a.xlsx"
    assert out.exists()
    assert not state.exporting


def test_run_export_ignored_while_in_flight(pizza_salad_snapshot: SalesSnapshot, tmp_path: Path) -> None:
    state = DashboardState.for_snapshot(pizza_salad_snapshot)
    state.exporting = True
    assert run_export(state, pizza_salad_snapshot, tmp_path / "a.xlsx") is None
    assert not (tmp_path / "a.xlsx").exists()
    assert state.exporting


def test_run_export_resets_flag_on_failure(pizza_salad_snapshot: SalesSnapshot, tmp_path: Path) -> None:
    state = DashboardState.for_snapshot(pizza_salad_snapshot)
    target = tmp_path / "busy"
    target.mkdir()
    (target / "keep.txt").write_text("x", encoding="utf-8")
    with pytest.raises(ExportFailure):
        run_export(state, pizza_salad_snapshot, target)
    assert not state.exporting
