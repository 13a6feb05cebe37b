"""
Pytest fixtures for the spending dashboard tests.

Provides reusable test fixtures: raw document rows as they come out of
Cosmos DB, the fallback record set, and a fake Cosmos container that can be
injected into create_app(container=...) or query_spending().
"""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dashboard.fallback import DEFAULT_SPENDING_DATA  # noqa: E402


class FakeContainer:
    """Stands in for azure.cosmos ContainerProxy.

    Returns *rows* from query_items(), or raises *error* if one is given.
    Every call is recorded in ``queries`` as (query, kwargs).
    """

    def __init__(self, rows=None, error=None):
        self.rows = list(rows or [])
        self.error = error
        self.queries: list[tuple[str, dict]] = []

    def query_items(self, query, **kwargs):
        self.queries.append((query, kwargs))
        if self.error is not None:
            raise self.error
        return iter(self.rows)


# Documents as stored: Cosmos adds system fields and types are not guaranteed.
_RAW_ROWS = [
    {"department": "Defense", "year": 2022, "amount": 750, "id": "1", "_ts": 1700000000},
    {"department": "Education", "year": "2022", "amount": "150"},
    {"department": "Healthcare", "year": 2022.0, "amount": 200.5},
    {"department": "", "year": 2022, "amount": 10},
    {"department": "Defense", "year": "twenty", "amount": 5},
    {"department": "Defense", "year": 2023, "amount": None},
    {"year": 2023, "amount": 1},
    {"department": "Transportation", "year": 2023, "amount": 110},
]


@pytest.fixture()
def raw_rows():
    """Mixed valid/invalid raw rows; 4 of the 8 survive normalization."""
    return [dict(r) for r in _RAW_ROWS]


@pytest.fixture()
def fallback_records():
    return list(DEFAULT_SPENDING_DATA)


@pytest.fixture()
def fallback_rows():
    """The fallback dataset as raw document dicts."""
    return [r.to_dict() for r in DEFAULT_SPENDING_DATA]


@pytest.fixture()
def fake_container_cls():
    return FakeContainer
