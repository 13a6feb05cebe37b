"""
Pydantic response models for the spending API.

Field() descriptions and examples feed the OpenAPI docs at /docs.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from utils.records import DashboardView, FilterSelection, SpendingRecord


# ── Record models ─────────────────────────────────────────────────────────────

class SpendingRecordOut(BaseModel):
    """One normalized spending record."""
    department: str = Field(..., min_length=1, description="Department name", examples=["Defense"])
    year: int = Field(..., description="Calendar year of the spending", examples=[2023])
    amount: float = Field(..., description="Amount spent", examples=[780.0])

    @classmethod
    def from_record(cls, record: SpendingRecord) -> "SpendingRecordOut":
        return cls(department=record.department, year=record.year, amount=record.amount)


# ── Dashboard models ──────────────────────────────────────────────────────────

class PieSliceOut(BaseModel):
    """One pie chart slice: a department and its filtered total."""
    label: str = Field(..., description="Department name", examples=["Education"])
    value: float = Field(..., description="Summed amount over the filtered records", examples=[160.0])


class TimeSeriesPointOut(BaseModel):
    year: str = Field(..., description="Year, as a string label", examples=["2022"])
    amount: float = Field(..., description="Amount for that record", examples=[750.0])


class TimeSeriesOut(BaseModel):
    """A department's spending history, ascending by year."""
    department: str = Field(..., description="Department name", examples=["Defense"])
    data: list[TimeSeriesPointOut] = Field(default_factory=list)


class SelectionOut(BaseModel):
    year: str = Field("", description="Selected year, empty for all years")
    department: str = Field("", description="Selected department, empty for all departments")


class DashboardResponse(BaseModel):
    """Response body for GET /api/dashboard."""
    selection: SelectionOut
    used_fallback: bool = Field(False, description="True when the built-in fallback dataset was used")
    available_years: list[int] = Field(default_factory=list, description="Year filter options")
    available_departments: list[str] = Field(default_factory=list, description="Department filter options")
    pie_chart: list[PieSliceOut] = Field(default_factory=list)
    time_series: list[TimeSeriesOut] = Field(default_factory=list)

    @classmethod
    def from_view(
        cls,
        view: DashboardView,
        selection: FilterSelection,
        used_fallback: bool = False,
    ) -> "DashboardResponse":
        return cls.model_validate({
            "selection": {"year": selection.year, "department": selection.department},
            "used_fallback": used_fallback,
            **view.to_dict(),
        })


# ── Error model ───────────────────────────────────────────────────────────────

class ErrorResponse(BaseModel):
    """Standard error response body."""
    error: str = Field(..., description="Short error category", examples=["Data source unavailable"])
    detail: str | None = Field(None, description="Extended error detail")
    status_code: int = Field(..., ge=400, le=599, description="HTTP status code", examples=[502])
