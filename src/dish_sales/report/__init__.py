"""Analysis workbook export (openpyxl)."""
