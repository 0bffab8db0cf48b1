"""Exceptions surfaced to the dashboard layer.

Only two failure kinds exist: the source workbook could not be loaded, or the
analysis workbook could not be written. Aggregations never raise.
"""

from __future__ import annotations


class DashboardError(RuntimeError):
    """Base class for failures the UI reports to the user."""


class LoadFailure(DashboardError):
    """Source workbook unreadable, or missing the expected sheet/columns."""


class ExportFailure(DashboardError):
    """Analysis workbook could not be built or written."""
