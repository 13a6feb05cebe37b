"""Value types shared by the normalizer, the aggregation engine and the dashboard.

All types are frozen dataclasses: records are never mutated after
normalization and filters only ever select subsets.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class SpendingRecord:
    """One validated spending observation."""

    department: str
    year: int
    amount: float

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FilterSelection:
    """Current filter choice.  An empty string is a wildcard for that dimension."""

    year: str = ""
    department: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.year and not self.department


@dataclass(frozen=True)
class PieSlice:
    label: str
    value: float


@dataclass(frozen=True)
class TimeSeriesPoint:
    year: str
    amount: float


@dataclass(frozen=True)
class DepartmentSeries:
    """A department's amount-over-year sequence, ascending by year."""

    department: str
    data: tuple[TimeSeriesPoint, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "department": self.department,
            "data": [asdict(p) for p in self.data],
        }


@dataclass(frozen=True)
class DashboardView:
    """Everything the dashboard page renders for one selection."""

    available_years: tuple[int, ...] = ()
    available_departments: tuple[str, ...] = ()
    pie_chart: tuple[PieSlice, ...] = ()
    time_series: tuple[DepartmentSeries, ...] = ()

    @property
    def pie_total(self) -> float:
        return sum(s.value for s in self.pie_chart)

    def to_dict(self) -> dict[str, Any]:
        return {
            "available_years": list(self.available_years),
            "available_departments": list(self.available_departments),
            "pie_chart": [asdict(s) for s in self.pie_chart],
            "time_series": [s.to_dict() for s in self.time_series],
        }
