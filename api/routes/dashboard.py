"""Dashboard endpoint: filter options, pie chart and time series in one payload."""

from fastapi import APIRouter, Depends, Query

from api.database import SpendingContainer, get_container, query_spending
from api.models import DashboardResponse
from dashboard.client import SpendingFetchError
from dashboard.state import DashboardSession
from utils.records import SpendingRecord

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def store_fetcher(container: SpendingContainer):
    """Adapt query_spending() to the fetch callable DashboardSession.load() expects."""

    def fetch() -> list[SpendingRecord]:
        result = query_spending(container)
        if not result.ok:
            raise SpendingFetchError(result.error)
        return result.records

    return fetch


def load_session(
    container: SpendingContainer,
    year: str = "",
    department: str = "",
) -> DashboardSession:
    """Load the record set once and apply the selection."""
    session = DashboardSession()
    session.load(store_fetcher(container))
    session.select(year=year, department=department)
    return session


@router.get("", response_model=DashboardResponse, summary="Dashboard chart data")
def dashboard_data(
    year: str = Query("", description="Restrict the pie chart to one year (e.g. '2023')"),
    department: str = Query("", description="Restrict the charts to one department"),
    container: SpendingContainer = Depends(get_container),
) -> DashboardResponse:
    """Return everything the dashboard page draws for one selection.

    - Year and department dropdown options
    - Pie chart slices: per-department totals over the filtered records
    - Time series: each department's full history, ascending by year.  The
      year filter never applies here; a department filter limits which
      series are returned.

    Falls back to the built-in dataset when the data source is unavailable
    (``used_fallback`` is then true).
    """
    session = load_session(container, year=year.strip(), department=department.strip())
    state = session.state
    return DashboardResponse.from_view(
        session.view(), state.selection, used_fallback=state.used_fallback
    )
