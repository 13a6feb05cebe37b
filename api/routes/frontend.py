"""
Frontend HTML route.

Serves the single dashboard page rendered from templates/dashboard.html:

    GET /    year + department dropdowns, a Chart.js pie chart of department
             totals, and one Chart.js line chart per department

The dropdowns submit a plain GET form, so ?year=2023&department=Defense
selects filters without any client-side state.  The page is rendered only
after the records have loaded, so it has no loading placeholder.
"""

from typing import Any

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.database import SpendingContainer, get_container
from api.routes.dashboard import load_session

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised — call set_templates() first")
    return _templates


def _chart_context(view) -> dict[str, Any]:
    """Shape the view into plain lists for the Chart.js config in the template."""
    d = view.to_dict()
    return {
        "pie_labels": [s["label"] for s in d["pie_chart"]],
        "pie_values": [s["value"] for s in d["pie_chart"]],
        "series": [
            {
                "department": s["department"],
                "labels": [p["year"] for p in s["data"]],
                "values": [p["amount"] for p in s["data"]],
            }
            for s in d["time_series"]
        ],
    }


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(
    request: Request,
    year: str = Query(""),
    department: str = Query(""),
    container: SpendingContainer = Depends(get_container),
) -> HTMLResponse:
    """Government spending dashboard page."""
    session = load_session(container, year=year.strip(), department=department.strip())
    state = session.state
    view = session.view()

    return _tmpl().TemplateResponse(
        request,
        "dashboard.html",
        {
            "selection":     state.selection,
            "used_fallback": state.used_fallback,
            "years":         [str(y) for y in view.available_years],
            "departments":   list(view.available_departments),
            "pie_chart":     view.pie_chart,
            "pie_total":     view.pie_total,
            "time_series":   view.time_series,
            **_chart_context(view),
        },
    )
