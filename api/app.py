"""
FastAPI application factory.

Usage:
    python -m api.app                    # Dev server on port 8000
    COSMOS_ENDPOINT=... COSMOS_KEY=... COSMOS_DATABASE=... \\
        COSMOS_CONTAINER=... python -m api.app

OpenAPI docs available at http://localhost:8000/docs after starting.

Structured JSON logging when APP_LOG_FORMAT=json.
CORS middleware with configurable origins via APP_CORS_ORIGINS.
"""

import json
import logging
import time
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.templating import Jinja2Templates

from api.database import SpendingContainer, get_container
from api.routes import dashboard, spending
from api.routes import frontend as frontend_routes
from utils.config import AppConfig, CosmosConfig

# ── Configuration ─────────────────────────────────────────────────────────────
_cfg = AppConfig.from_env()

# ── Structured JSON logging ───────────────────────────────────────────────────


class _JsonFormatter(logging.Formatter):
    """Emit log records as newline-delimited JSON."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Merge extra fields added via logger.info("...", extra={...})
        for key in ("method", "path", "status", "duration_ms", "request_id"):
            if hasattr(record, key):
                data[key] = getattr(record, key)
        if record.exc_info:
            data["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(data)


_logger = logging.getLogger("spending_api")
_handler = logging.StreamHandler()
if _cfg.log_format == "json":
    _handler.setFormatter(_JsonFormatter())
else:
    _handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    )
logging.basicConfig(handlers=[_handler], level=_cfg.log_level, force=True)

_app_start_time: float = time.time()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log effective settings; warn when the Cosmos DB settings are incomplete."""
    _logger.info("startup app_config=%s", _cfg.to_dict())
    if get_container not in app.dependency_overrides:
        cosmos_cfg = CosmosConfig.from_env()
        _logger.info("startup cosmos_config=%s", cosmos_cfg.to_dict())
        missing = cosmos_cfg.missing()
        if missing:
            _logger.warning(
                "Cosmos DB not configured (missing %s); "
                "/api/spending will fail and the dashboard will show fallback data",
                ", ".join(missing),
            )
    yield


def create_app(container: SpendingContainer | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        container: Override the Cosmos DB container (useful for testing).

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title="Government Spending API",
        summary="Spending records by department and year, with dashboard chart data.",
        description=(
            "## Government Spending Dashboard API\n\n"
            "Serves government spending records stored in Azure Cosmos DB.\n\n"
            "### Key concepts\n"
            "- A **record** is one `{department, year, amount}` observation.\n"
            "- Rows with an empty department or non-numeric year/amount are "
            "dropped before they reach any response.\n"
            "- The **pie chart** honours both the year and department filters; "
            "the **time series** always shows full history.\n"
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "spending",
                "description": "Flat list of normalized spending records.",
            },
            {
                "name": "dashboard",
                "description": "Filter options, pie chart and time series for one selection.",
            },
            {
                "name": "meta",
                "description": "Health check and API metadata.",
            },
        ],
    )

    if container is not None:
        app.dependency_overrides[get_container] = lambda: container

    # ── CORS middleware ───────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=_cfg.cors_origins,
        allow_credentials=False,
        allow_methods=["GET", "HEAD", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request and tag the response with a request ID."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if _cfg.log_format == "json":
            _logger.info(
                "request",
                extra={
                    "method": request.method,
                    "path": path,
                    "status": response.status_code,
                    "duration_ms": round(duration_ms, 1),
                    "request_id": request_id,
                },
            )
        else:
            _logger.info(
                "method=%s path=%s status=%d duration_ms=%.1f rid=%s",
                request.method, path, response.status_code, duration_ms,
                request_id,
            )
        return response

    # ── Content Security Policy + security headers ────────────────────────────

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        """Add Content-Security-Policy, X-Content-Type-Options, and X-Frame-Options."""
        response = await call_next(request)
        # Chart.js loads from jsdelivr; the page's chart setup is an inline <script>.
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' cdn.jsdelivr.net 'unsafe-inline'; "
            "style-src 'self' 'unsafe-inline'; "
            "img-src 'self' data:; "
            "connect-src 'self';"
        )
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    # ── Error handling ────────────────────────────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Catch unhandled exceptions and return JSON instead of HTML traceback."""
        _logger.exception("unhandled_error path=%s", request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": "Internal server error",
                "detail": str(exc),
                "status_code": 500,
            },
        )

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        return JSONResponse(
            status_code=400,
            content={"error": "Bad request", "detail": str(exc), "status_code": 400},
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if the API process is up.

        Does not query Cosmos DB; ``cosmos_configured`` only reports whether
        all COSMOS_* settings are present.
        """
        configured = (
            get_container in app.dependency_overrides
            or not CosmosConfig.from_env().missing()
        )
        return {
            "status": "ok",
            "cosmos_configured": configured,
            "uptime_seconds": round(time.time() - _app_start_time, 2),
        }

    # ── Register routers ──────────────────────────────────────────────────────

    prefix = "/api"
    app.include_router(spending.router,  prefix=prefix)
    app.include_router(dashboard.router, prefix=prefix)

    # ── Jinja2 templates ──────────────────────────────────────────────────────
    templates_dir = Path(__file__).parent.parent / "templates"

    if templates_dir.exists():
        templates = Jinja2Templates(directory=str(templates_dir))

        def fmt_amount(value) -> str:
            """Jinja filter: format an amount with comma separators."""
            try:
                v = float(value)
            except (TypeError, ValueError):
                return "—"
            return f"{v:,.0f}" if v.is_integer() else f"{v:,.2f}"

        templates.env.filters["fmt_amount"] = fmt_amount

        frontend_routes.set_templates(templates)
        app.include_router(frontend_routes.router)

    return app


# Singleton instance for uvicorn
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "api.app:app",
        host=_cfg.api_host,
        port=_cfg.api_port,
        reload=True,
        log_level="info",
    )
