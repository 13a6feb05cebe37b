"""
Serverless entry point for the spending list.

Function hosts (AWS Lambda style ``handler(event, context)``) call this
instead of running the FastAPI app.  It performs the same single query as
GET /api/spending and returns an HTTP-shaped dict:

    {"statusCode": 200, "headers": {...}, "body": "[{...}, ...]"}

A failed query returns statusCode 502 with an ErrorResponse body.
"""

import json
import logging

from api.database import CosmosContainer, SpendingContainer, query_spending
from api.models import ErrorResponse

logger = logging.getLogger(__name__)

_HEADERS = {
    "Content-Type": "application/json",
    "Access-Control-Allow-Origin": "*",
}


def handler(event, context, container: SpendingContainer | None = None) -> dict:
    """List all spending records.

    Args:
        event: Invocation event (unused; the query takes no parameters).
        context: Runtime context (unused).
        container: Cosmos container override, mainly for tests.
    """
    if container is None:
        with CosmosContainer() as owned:
            result = query_spending(owned)
    else:
        result = query_spending(container)
    if not result.ok:
        body = ErrorResponse(
            error="Data source unavailable", detail=result.error, status_code=502,
        )
        return {
            "statusCode": 502,
            "headers": _HEADERS,
            "body": body.model_dump_json(),
        }

    logger.info("handler returned records=%d", len(result.records))
    return {
        "statusCode": 200,
        "headers": _HEADERS,
        "body": json.dumps([r.to_dict() for r in result.records]),
    }
