"""dish_sales package.

Reads a spreadsheet of monthly dish sales, derives per-dish series, rankings,
growth rates and summary rows, and re-exports a styled analysis workbook.
A thin Streamlit app in ``streamlit_app/`` renders the same aggregates.

Architecture:
- Loader → validated `SalesSheet` (pydantic) → immutable `SalesSnapshot`
- Aggregations are pure functions over the snapshot's series
- Report builder writes the workbook with openpyxl
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
