"""Aggregation engine for the spending dashboard.

Pure functions over an in-memory record set.  Nothing here keeps state, so
every function is safe to call again on each render:

    unique_values       filter dropdown options
    filter_records      records matching a FilterSelection
    department_totals   department -> summed amount (pie chart input)
    pie_chart_series    totals reshaped into label/value slices
    time_series         per-department chronological series
    build_dashboard_view  all of the above for one selection

The pie chart honours both filters.  The time series ignores the year
filter and is always drawn from the full record history; the department
filter only decides which department series are shown.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from utils.records import (
    DashboardView,
    DepartmentSeries,
    FilterSelection,
    PieSlice,
    SpendingRecord,
    TimeSeriesPoint,
)

_FIELDS = ("department", "year", "amount")


def unique_values(records: Iterable[SpendingRecord], field: str) -> list[Any]:
    """Return distinct values of *field*, in first-occurrence order."""
    if field not in _FIELDS:
        raise ValueError(f"field must be one of: {list(_FIELDS)}")
    # dict preserves insertion order and gives O(1) membership
    seen: dict[Any, None] = {}
    for record in records:
        seen.setdefault(getattr(record, field), None)
    return list(seen)


def filter_records(
    records: Iterable[SpendingRecord],
    selection: FilterSelection,
) -> list[SpendingRecord]:
    """Return the records matching both dimensions of *selection*."""
    year = selection.year
    department = selection.department
    return [
        r for r in records
        if (not year or str(r.year) == year)
        and (not department or r.department == department)
    ]


def department_totals(records: Iterable[SpendingRecord]) -> dict[str, float]:
    """Sum amounts per department.  Departments with no records are absent."""
    totals: dict[str, float] = {}
    for r in records:
        totals[r.department] = totals.get(r.department, 0) + r.amount
    return totals


def pie_chart_series(totals: Mapping[str, float]) -> list[PieSlice]:
    return [PieSlice(label=dept, value=amount) for dept, amount in totals.items()]


def time_series(
    records: Sequence[SpendingRecord],
    departments: Iterable[str],
) -> list[DepartmentSeries]:
    """Build one ascending-by-year series per department.

    *records* should be the unfiltered set.  A department with no records
    gets an empty series.  Records sharing a year keep their input order.
    """
    series = []
    for department in departments:
        rows = sorted(
            (r for r in records if r.department == department),
            key=lambda r: r.year,
        )
        series.append(DepartmentSeries(
            department=department,
            data=tuple(TimeSeriesPoint(year=str(r.year), amount=r.amount) for r in rows),
        ))
    return series


def build_dashboard_view(
    records: Sequence[SpendingRecord],
    selection: FilterSelection | None = None,
) -> DashboardView:
    """Derive every chart and dropdown input for *selection*."""
    if not records:
        return DashboardView()
    selection = selection or FilterSelection()

    years = unique_values(records, "year")
    departments = unique_values(records, "department")

    filtered = filter_records(records, selection)
    pie = pie_chart_series(department_totals(filtered))

    series_departments = (
        [selection.department] if selection.department else departments
    )
    series = time_series(records, series_departments)

    return DashboardView(
        available_years=tuple(years),
        available_departments=tuple(departments),
        pie_chart=tuple(pie),
        time_series=tuple(series),
    )
