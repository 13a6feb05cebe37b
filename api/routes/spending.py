"""
GET /api/spending endpoint.

Returns every normalized spending record as a flat JSON array.  A failed
Cosmos DB query becomes a 502 ErrorResponse, never a 200 with an error
object in the body.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.database import SpendingContainer, get_container, query_spending
from api.models import ErrorResponse, SpendingRecordOut

router = APIRouter(prefix="/spending", tags=["spending"])


def error_response(detail: str | None, status_code: int = 502) -> JSONResponse:
    body = ErrorResponse(
        error="Data source unavailable",
        detail=detail,
        status_code=status_code,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


@router.get(
    "",
    response_model=list[SpendingRecordOut],
    summary="List all spending records",
    responses={
        502: {"model": ErrorResponse, "description": "The document store query failed"},
    },
)
def list_spending(
    container: SpendingContainer = Depends(get_container),
):
    """Return all spending records as ``{department, year, amount}`` objects.

    Rows with an empty department or a non-numeric year/amount are dropped
    before the response is built.
    """
    result = query_spending(container)
    if not result.ok:
        return error_response(result.error)
    return [SpendingRecordOut.from_record(r) for r in result.records]
