"""
Tests for dashboard/state.py — reducer transitions and session liveness.
"""
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dashboard.client import SpendingFetchError
from dashboard.fallback import DEFAULT_SPENDING_DATA
from dashboard.state import (
    DashboardSession,
    DashboardState,
    DepartmentChanged,
    FetchResolved,
    YearChanged,
    reduce,
)
from utils.records import FilterSelection, SpendingRecord


class TestReduce:
    def test_initial_state(self):
        state = DashboardState()
        assert state.loading is True
        assert state.records == ()
        assert state.selection == FilterSelection("", "")

    def test_fetch_resolved_clears_loading(self, fallback_records):
        state = reduce(DashboardState(), FetchResolved(tuple(fallback_records)))
        assert state.loading is False
        assert len(state.records) == 8
        assert state.used_fallback is False

    def test_fetch_resolved_records_fallback_flag(self):
        state = reduce(DashboardState(), FetchResolved(DEFAULT_SPENDING_DATA, used_fallback=True))
        assert state.used_fallback is True

    def test_year_changed(self):
        state = reduce(DashboardState(), YearChanged("2023"))
        assert state.selection == FilterSelection(year="2023")

    def test_department_changed_keeps_year(self):
        state = reduce(DashboardState(), YearChanged("2023"))
        state = reduce(state, DepartmentChanged("Defense"))
        assert state.selection == FilterSelection(year="2023", department="Defense")

    def test_clearing_a_filter(self):
        state = reduce(DashboardState(), YearChanged("2023"))
        state = reduce(state, YearChanged(""))
        assert state.selection.is_empty

    def test_reduce_does_not_mutate(self):
        before = DashboardState()
        reduce(before, YearChanged("2022"))
        assert before.selection.year == ""

    def test_unknown_event(self):
        with pytest.raises(TypeError):
            reduce(DashboardState(), object())

    def test_view_uses_selection(self, fallback_records):
        state = reduce(DashboardState(), FetchResolved(tuple(fallback_records)))
        state = reduce(state, YearChanged("2023"))
        assert state.view().pie_total == 1260


class TestDashboardSession:
    def test_load_success(self, fallback_records):
        session = DashboardSession()
        session.load(lambda: fallback_records[:2])
        assert session.state.loading is False
        assert len(session.state.records) == 2
        assert session.state.used_fallback is False

    def test_load_failure_uses_fallback(self):
        def failing():
            raise SpendingFetchError("boom")

        session = DashboardSession()
        session.load(failing)
        assert session.state.records == DEFAULT_SPENDING_DATA
        assert session.state.used_fallback is True

    def test_select(self, fallback_records):
        session = DashboardSession()
        session.load(lambda: fallback_records)
        session.select(year="2022", department="Education")
        view = session.view()
        assert [(s.label, s.value) for s in view.pie_chart] == [("Education", 150)]

    def test_closed_session_ignores_late_fetch(self):
        session = DashboardSession()
        session.close()
        session.load(lambda: [SpendingRecord("A", 2022, 1)])
        assert session.alive is False
        assert session.state.loading is True
        assert session.state.records == ()

    def test_closed_session_ignores_filter_events(self, fallback_records):
        session = DashboardSession()
        session.load(lambda: fallback_records)
        session.close()
        session.dispatch(YearChanged("2022"))
        assert session.state.selection.year == ""

    def test_empty_record_set(self):
        session = DashboardSession()
        session.load(lambda: [])
        assert session.state.loading is False
        assert session.view().pie_chart == ()
