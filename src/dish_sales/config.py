"""Configuration helpers and Settings container.

This module provides a small `Settings` dataclass and `get_settings` which
reads environment variables (optionally from a project-root ``.env``) and
validates the top-N setting.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Explicitly load .env from project root
PROJECT_ROOT = Path(__file__).resolve().parents[2]
load_dotenv(PROJECT_ROOT / ".env")

DEFAULT_TOP_N = 5


@dataclass(frozen=True)
class Settings:
    """Container for dashboard configuration read from the environment.

    Attributes:
        workbook_path: Source workbook with the monthly dish sales.
        sheet_name: Sheet inside the workbook holding the dish × month table.
        category_column: Header of the dish-name column (matched after stripping).
        top_n: Number of dishes treated as "top" by total sales.
        export_path: Where the analysis workbook is written.
        log_path: Log file location.
    """
    workbook_path: Path
    sheet_name: str
    category_column: str
    top_n: int
    export_path: Path
    log_path: Path


def _parse_top_n(raw: str) -> int:
    try:
        top_n = int(raw)
    except ValueError:
        raise RuntimeError(f"TOP_N must be an integer, got {raw!r}.") from None
    if top_n < 1:
        raise RuntimeError(f"TOP_N must be at least 1, got {top_n}.")
    return top_n


def get_settings() -> Settings:
    """Read environment variables and return a frozen `Settings` object.

    Raises:
        RuntimeError: if `TOP_N` is not a positive integer.
    """
    workbook_path = Path(os.getenv("SALES_WORKBOOK", "data/Food Monitoring scale.xlsx"))
    sheet_name = os.getenv("SALES_SHEET", "DISH").strip()
    category_column = os.getenv("CATEGORY_COLUMN", "Dish").strip()
    top_n = _parse_top_n(os.getenv("TOP_N", str(DEFAULT_TOP_N)).strip())
    export_path = Path(os.getenv("EXPORT_PATH", "exports/Food_Sales_Analysis.xlsx"))
    log_path = Path(os.getenv("LOG_PATH", "logs/dashboard.log"))

    return Settings(
        workbook_path=workbook_path,
        sheet_name=sheet_name,
        category_column=category_column,
        top_n=top_n,
        export_path=export_path,
        log_path=log_path,
    )
