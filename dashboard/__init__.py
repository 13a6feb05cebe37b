"""
Spending dashboard client-side logic.

State container, HTTP client and fallback dataset used by the HTML page and
by spending_report.py.
"""

from dashboard.client import SpendingClient, SpendingFetchError, load_spending
from dashboard.fallback import DEFAULT_SPENDING_DATA
from dashboard.state import (
    DashboardSession,
    DashboardState,
    DepartmentChanged,
    FetchResolved,
    YearChanged,
    reduce,
)

__all__ = [
    "DEFAULT_SPENDING_DATA",
    "DashboardSession",
    "DashboardState",
    "DepartmentChanged",
    "FetchResolved",
    "SpendingClient",
    "SpendingFetchError",
    "YearChanged",
    "load_spending",
    "reduce",
]
