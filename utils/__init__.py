"""Shared utilities for the government spending dashboard."""

# Record types
from utils.records import (
    DashboardView,
    DepartmentSeries,
    FilterSelection,
    PieSlice,
    SpendingRecord,
    TimeSeriesPoint,
)

# Row normalization
from utils.normalize import coerce_number, normalize_row, normalize_rows

# Aggregation engine
from utils.aggregation import (
    build_dashboard_view,
    department_totals,
    filter_records,
    pie_chart_series,
    time_series,
    unique_values,
)

# Configuration
from utils.config import AppConfig, ClientConfig, CosmosConfig

__all__ = [
    "AppConfig",
    "ClientConfig",
    "CosmosConfig",
    "DashboardView",
    "DepartmentSeries",
    "FilterSelection",
    "PieSlice",
    "SpendingRecord",
    "TimeSeriesPoint",
    "build_dashboard_view",
    "coerce_number",
    "department_totals",
    "filter_records",
    "normalize_row",
    "normalize_rows",
    "pie_chart_series",
    "time_series",
    "unique_values",
]
