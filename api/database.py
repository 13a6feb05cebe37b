"""
Cosmos DB access for the API.

Provides a get_container() dependency that resolves the spending container
from COSMOS_* environment variables, and query_spending(), the single read
operation the API performs: run a fixed projection over every document and
normalize the rows into SpendingRecords.

query_spending() never raises for data-source failures.  It returns a
QueryResult that is either ok (records) or failed (reason), so callers
pick the HTTP status themselves instead of receiving an arbitrary error
object.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Generator
from dataclasses import dataclass, field
from typing import Any, Protocol

from azure.core.exceptions import AzureError
from azure.cosmos import CosmosClient

from utils.config import CosmosConfig
from utils.normalize import normalize_rows
from utils.records import SpendingRecord

logger = logging.getLogger(__name__)

SPENDING_QUERY = "SELECT c.department, c.year, c.amount FROM c"


class SpendingContainer(Protocol):
    """The slice of azure.cosmos ContainerProxy this module uses."""

    def query_items(self, query: str, **kwargs: Any) -> Any: ...


class CosmosConfigError(ValueError):
    """Raised when a Cosmos setting needed to build a client is missing."""


@dataclass(frozen=True)
class QueryResult:
    """Outcome of query_spending(): records on success, a reason on failure."""

    records: list[SpendingRecord] = field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, records: list[SpendingRecord]) -> "QueryResult":
        return cls(records=records)

    @classmethod
    def failure(cls, reason: str) -> "QueryResult":
        return cls(error=reason)


def make_client(cfg: CosmosConfig) -> CosmosClient:
    """Build a CosmosClient from *cfg*.

    Raises:
        CosmosConfigError: If any COSMOS_* setting is missing.
    """
    missing = cfg.missing()
    if missing:
        raise CosmosConfigError(f"Missing Cosmos DB settings: {', '.join(missing)}")
    return CosmosClient(cfg.endpoint, credential=cfg.key)


class CosmosContainer:
    """Spending container that opens its client on the first query.

    Keeps configuration errors on the query path so they are reported as a
    failed QueryResult rather than a crash at dependency resolution.  The
    owner must call close() (or use it as a context manager) to release the
    client's connection pool.
    """

    def __init__(self, cfg: CosmosConfig | None = None) -> None:
        self._cfg = cfg
        self._client: CosmosClient | None = None
        self._container: SpendingContainer | None = None

    def query_items(self, query: str, **kwargs: Any) -> Any:
        if self._container is None:
            cfg = self._cfg or CosmosConfig.from_env()
            self._client = make_client(cfg)
            database = self._client.get_database_client(cfg.database_id)
            self._container = database.get_container_client(cfg.container_id)
        return self._container.query_items(query=query, **kwargs)

    def close(self) -> None:
        if self._client is not None:
            self._client.close()
        self._client = None
        self._container = None

    def __enter__(self) -> "CosmosContainer":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


def get_container() -> Generator[SpendingContainer, None, None]:
    """FastAPI dependency: yield the spending container, close on exit.

    create_app(container=...) replaces this dependency for tests.

    Usage in a route::

        from api.database import get_container
        from fastapi import Depends

        @router.get("/example")
        def example(container=Depends(get_container)):
            ...
    """
    with CosmosContainer() as container:
        yield container


def query_spending(container: SpendingContainer) -> QueryResult:
    """Fetch and normalize every spending document.

    Single best-effort attempt: no retries, no partial results.
    """
    start = time.monotonic()
    try:
        rows = list(container.query_items(
            query=SPENDING_QUERY,
            enable_cross_partition_query=True,
        ))
    except (AzureError, CosmosConfigError) as exc:
        duration_ms = (time.monotonic() - start) * 1000
        logger.error(
            "cosmos_query_failed error=%s duration_ms=%.1f",
            exc, duration_ms,
        )
        return QueryResult.failure(str(exc) or exc.__class__.__name__)

    records = normalize_rows(rows)
    duration_ms = (time.monotonic() - start) * 1000
    logger.info(
        "cosmos_query rows=%d kept=%d duration_ms=%.1f",
        len(rows), len(records), duration_ms,
    )
    return QueryResult.success(records)
