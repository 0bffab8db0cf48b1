"""Pydantic models for the loaded sheet and the derived aggregates.

The loader validates the source once into a `SalesSheet`; everything the
aggregation layer produces (`SeriesPoint`, `GrowthPoint`, `SummaryRow`) is an
immutable model as well.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def normalize_value(value: Any) -> float:
    """Return a cell value as float, mapping null/NaN/non-numeric cells to 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


class GrowthClass(str, Enum):
    """Display classification for a growth or trend percentage."""
    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"


class CategoryRecord(BaseModel):
    """One dish row: name plus a value for each period.

    Attributes:
        name: Dish name, the row key.
        values: Mapping period → sales count. Null or malformed cells are
            stored as ``0.0``.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    name: str = Field(..., min_length=1)
    values: dict[str, float] = Field(default_factory=dict)

    @field_validator("values", mode="before")
    @classmethod
    def _normalize_values(cls, raw: Any) -> dict[str, float]:
        if raw is None:
            return {}
        return {str(k): normalize_value(v) for k, v in dict(raw).items()}

    def value_for(self, period: str) -> float:
        return self.values.get(period, 0.0)


class SalesSheet(BaseModel):
    """Validated dish × period table.

    Attributes:
        category_column: Header of the dish-name column as found in the source.
        periods: Period labels in sheet order.
        records: Dish rows in sheet order.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    category_column: str
    periods: list[str]
    records: list[CategoryRecord] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_schema(self) -> "SalesSheet":
        if len(set(self.periods)) != len(self.periods):
            raise ValueError("period labels must be unique")
        names = [r.name for r in self.records]
        if len(set(names)) != len(names):
            raise ValueError("category names must be unique")
        known = set(self.periods)
        for r in self.records:
            extra = set(r.values) - known
            if extra:
                raise ValueError(f"record {r.name!r} has unknown periods: {sorted(extra)}")
        return self

    @property
    def categories(self) -> list[str]:
        return [r.name for r in self.records]


class SeriesPoint(BaseModel):
    """Sales value of one dish for one period."""
    model_config = ConfigDict(extra="forbid", frozen=True)
    period: str
    value: float


class GrowthPoint(BaseModel):
    """Period-over-period growth for one period (never the first one).

    Attributes:
        period: Period the growth is reported for.
        growth: Percentage change vs. the previous period, full precision.
            ``0.0`` when the previous value was not positive.
        has_baseline: False when the previous value was not positive, i.e.
            the ``0.0`` means "undefined" rather than "flat".
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    period: str
    growth: float
    has_baseline: bool = True

    @property
    def display(self) -> float:
        return round(self.growth, 1)


class SummaryRow(BaseModel):
    """Per-dish summary over the whole period range.

    Attributes:
        category: Dish name.
        total: Sum over all periods.
        average: ``total`` divided by the number of periods.
        trend: Percent change from first to last period; ``0.0`` when the
            first value is zero.
        first: Value in the first period.
        last: Value in the last period.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)
    category: str
    total: float
    average: float
    trend: float
    first: float
    last: float
