"""Dashboard UI state as an explicit container with reducer-style transitions.

State changes only through reduce(state, event).  Three events exist:

    FetchResolved       the record set arrived (real or fallback)
    YearChanged         the year dropdown changed
    DepartmentChanged   the department dropdown changed

DashboardSession wraps a state with a liveness flag.  Once close() has been
called, late fetch results are discarded instead of updating a torn-down
view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import Union

from dashboard.client import load_spending
from utils.aggregation import build_dashboard_view
from utils.records import DashboardView, FilterSelection, SpendingRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardState:
    loading: bool = True
    records: tuple[SpendingRecord, ...] = ()
    selection: FilterSelection = field(default_factory=FilterSelection)
    used_fallback: bool = False

    def view(self) -> DashboardView:
        return build_dashboard_view(self.records, self.selection)


@dataclass(frozen=True)
class FetchResolved:
    records: tuple[SpendingRecord, ...]
    used_fallback: bool = False


@dataclass(frozen=True)
class YearChanged:
    year: str


@dataclass(frozen=True)
class DepartmentChanged:
    department: str


Event = Union[FetchResolved, YearChanged, DepartmentChanged]


def reduce(state: DashboardState, event: Event) -> DashboardState:
    """Return the state that follows *event*.  *state* is left untouched."""
    if isinstance(event, FetchResolved):
        return replace(
            state,
            loading=False,
            records=tuple(event.records),
            used_fallback=event.used_fallback,
        )
    if isinstance(event, YearChanged):
        return replace(state, selection=replace(state.selection, year=event.year))
    if isinstance(event, DepartmentChanged):
        return replace(
            state, selection=replace(state.selection, department=event.department)
        )
    raise TypeError(f"Unknown dashboard event: {event!r}")


class DashboardSession:
    """Holds the current DashboardState for one page or report run."""

    def __init__(self, state: DashboardState | None = None) -> None:
        self.state = state or DashboardState()
        self._alive = True

    @property
    def alive(self) -> bool:
        return self._alive

    def dispatch(self, event: Event) -> DashboardState:
        """Apply *event* unless the session has been closed."""
        if not self._alive:
            logger.debug("Ignoring %s on closed dashboard session", type(event).__name__)
            return self.state
        self.state = reduce(self.state, event)
        return self.state

    def load(self, fetch: Callable[[], list[SpendingRecord]]) -> DashboardState:
        """Fetch the record set (fallback on failure) and resolve loading."""
        records, used_fallback = load_spending(fetch)
        return self.dispatch(FetchResolved(tuple(records), used_fallback))

    def select(self, year: str = "", department: str = "") -> DashboardState:
        self.dispatch(YearChanged(year))
        return self.dispatch(DepartmentChanged(department))

    def view(self) -> DashboardView:
        return self.state.view()

    def close(self) -> None:
        self._alive = False
