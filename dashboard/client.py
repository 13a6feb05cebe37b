"""HTTP client for the spending API, with the fallback-dataset substitution.

SpendingClient performs one GET against ``/api/spending`` and raises
SpendingFetchError for anything other than a 2xx response carrying a JSON
array.  load_spending() turns that error into the built-in fallback
dataset, so callers always receive something to draw.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

import requests

from dashboard.fallback import DEFAULT_SPENDING_DATA
from utils.config import ClientConfig
from utils.normalize import normalize_rows
from utils.records import SpendingRecord

logger = logging.getLogger(__name__)

SPENDING_PATH = "/api/spending"


class SpendingFetchError(Exception):
    """The spending records could not be fetched or decoded."""


class SpendingClient:
    """Fetches spending records from a running spending API."""

    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 session: Optional[requests.Session] = None):
        """Initialize the client.

        Args:
            base_url: API root, e.g. ``http://localhost:8000`` (default: SPENDING_API_URL)
            timeout: Per-request timeout in seconds (default: SPENDING_API_TIMEOUT)
            session: Pre-built session, mainly for tests
        """
        cfg = ClientConfig.from_env()
        self.base_url = (base_url or cfg.api_url).rstrip("/")
        self.timeout = timeout if timeout is not None else cfg.timeout
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    @property
    def url(self) -> str:
        return self.base_url + SPENDING_PATH

    def fetch(self) -> list[SpendingRecord]:
        """GET the record set once.

        Raises:
            SpendingFetchError: On network failure, non-OK status, invalid
                JSON, or a payload that is not a JSON array.
        """
        try:
            resp = self.session.get(self.url, timeout=self.timeout)
        except requests.RequestException as exc:
            raise SpendingFetchError(f"Request to {self.url} failed: {exc}") from exc

        if not resp.ok:
            raise SpendingFetchError(f"Failed to fetch data: HTTP {resp.status_code}")

        try:
            payload = resp.json()
        except ValueError as exc:
            raise SpendingFetchError(f"Invalid JSON from {self.url}: {exc}") from exc

        if not isinstance(payload, list):
            raise SpendingFetchError(
                f"Expected a JSON array from {self.url}, got {type(payload).__name__}"
            )
        return normalize_rows(payload)

    def close(self) -> None:
        if self._session:
            self._session.close()
            self._session = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


def load_spending(
    fetch: Callable[[], list[SpendingRecord]],
) -> tuple[list[SpendingRecord], bool]:
    """Run *fetch*, falling back to the built-in dataset on failure.

    Returns:
        (records, used_fallback)
    """
    try:
        return fetch(), False
    except SpendingFetchError as exc:
        logger.warning("Failed to fetch spending data: %s; using fallback dataset", exc)
        return list(DEFAULT_SPENDING_DATA), True
