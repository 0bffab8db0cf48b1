"""Spreadsheet loading for the dashboard.

Reads the source workbook with pandas and validates it into the typed
`SalesSheet` model once, at load time.
"""
