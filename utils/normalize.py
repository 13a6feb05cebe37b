"""Row normalization for raw spending documents.

Raw rows come straight from the document store and carry department, year
and amount fields of unvalidated type.  normalize_rows() coerces them into
SpendingRecord values and silently drops every row that cannot be coerced:

    - department missing, empty or whitespace-only
    - year not numeric, or numeric but not a whole number
    - amount not numeric, NaN, infinite or beyond float range

Department names are kept exactly as stored; " Defense" and "Defense" are
distinct departments.

Output order always follows input order; nothing is deduplicated.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from utils.records import SpendingRecord

logger = logging.getLogger(__name__)


def coerce_number(value: Any) -> float | None:
    """Coerce *value* to a finite float, or return None.

    Accepts ints, floats and numeric strings (surrounding whitespace is
    ignored).  None, booleans, empty strings, NaN, infinities and
    integers too large for a float are rejected.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        raw = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
    try:
        number = float(raw)
    except (OverflowError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def normalize_row(row: Any) -> SpendingRecord | None:
    """Return a SpendingRecord for one raw row, or None if it is malformed."""
    if not isinstance(row, Mapping):
        return None

    department = row.get("department")
    if department is None:
        return None
    try:
        department = str(department)
    except ValueError:
        # int too long to render as a string
        return None
    if not department.strip():
        return None

    year = coerce_number(row.get("year"))
    if year is None or not year.is_integer():
        return None

    amount = coerce_number(row.get("amount"))
    if amount is None:
        return None

    return SpendingRecord(department=department, year=int(year), amount=amount)


def normalize_rows(rows: Iterable[Any]) -> list[SpendingRecord]:
    """Normalize raw rows into SpendingRecords, dropping malformed rows."""
    records: list[SpendingRecord] = []
    seen = 0
    for row in rows:
        seen += 1
        record = normalize_row(row)
        if record is not None:
            records.append(record)
    dropped = seen - len(records)
    if dropped:
        logger.debug("normalize_rows dropped=%d kept=%d", dropped, len(records))
    return records
