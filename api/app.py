"""
FastAPI application factory for the semantic map viewer.

Usage:
    python -m api.app                                  # Dev server on port 8000
    APP_DATA_SOURCE=https://host/data_semantic_map.json python -m api.app

Serves the viewer page at /, the HTMX detail partials, and a small JSON API
under /api/v1.  OpenAPI docs are at http://localhost:8000/docs.

Structured JSON logging when APP_LOG_FORMAT=json.
"""

import json
import logging
import time
import uuid
import warnings
from contextlib import asynccontextmanager
from http import HTTPStatus
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.exceptions import HTTPException as StarletteHTTPException

from api.models import ErrorResponse
from api.routes import frontend as frontend_routes
from api.routes import variables
from api.viewer import ViewerSession
from utils.config import AppConfig, is_url

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


def configure_logging(log_format: str) -> None:
    """Install one stream handler on the root logger in the chosen format."""
    handler = logging.StreamHandler()
    if log_format == "json":
        handler.setFormatter(_JsonFormatter())
    else:
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
    logging.basicConfig(handlers=[handler], level=logging.INFO, force=True)


configure_logging(_cfg.log_format)
_logger = logging.getLogger("semantic_map_viewer")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the effective settings and check the local document on startup;
    release the HTTP session on exit."""
    viewer: ViewerSession = app.state.viewer
    _logger.info("starting semantic map viewer config=%s", app.state.config.to_dict())
    source = viewer.controller.loader.source
    if not is_url(source) and not Path(source).exists():
        warnings.warn(
            f"Semantic map not found at {source}. "
            "Set APP_DATA_SOURCE to a file path or URL.",
            stacklevel=2,
        )
    yield
    viewer.close()


def create_app(data_source: str | Path | None = None,
               config: AppConfig | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        data_source: Override the document URL or path (useful for testing).
        config: Override the environment-derived configuration.

    Returns:
        Configured FastAPI application instance.
    """
    cfg = config or AppConfig.from_env()
    if data_source is not None:
        cfg.data_source = str(data_source)

    app = FastAPI(
        title="Semantic Map Viewer",
        summary="Browse dataset variables and their ontology mappings.",
        description=(
            "## Semantic Map Viewer\n\n"
            "Loads `data_semantic_map.json`, groups its variables by the "
            "aesthetic label of their first schema-reconstruction step, and "
            "shows each variable's ontology class, schema reconstruction path, "
            "and value mappings.\n\n"
            "Variables without a label are listed under **Other**."
        ),
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_tags=[
            {
                "name": "variables",
                "description": "Groups, per-variable detail, and view state.",
            },
            {
                "name": "meta",
                "description": "Health check.",
            },
        ],
    )
    app.state.config = cfg
    app.state.viewer = ViewerSession.from_config(cfg)

    # ── Request logging middleware ────────────────────────────────────────────

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log each request with a short request id."""
        request_id = str(uuid.uuid4())[:8]
        start = time.monotonic()
        path = request.url.path

        response = await call_next(request)
        duration_ms = (time.monotonic() - start) * 1000
        response.headers["X-Request-ID"] = request_id

        if cfg.log_format == "json":
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
        # HTMX is loaded from unpkg.
        response.headers["Content-Security-Policy"] = (
            "default-src 'self'; "
            "script-src 'self' unpkg.com; "
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
        _logger.error("unhandled error path=%s", request.url.path, exc_info=exc)
        body = ErrorResponse(error="Internal server error", detail=str(exc), status_code=500)
        return JSONResponse(status_code=500, content=body.model_dump())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Return 404/409/503 and friends in the ErrorResponse shape."""
        body = ErrorResponse(
            error=HTTPStatus(exc.status_code).phrase,
            detail=str(exc.detail),
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(),
            headers=getattr(exc, "headers", None),
        )

    # ── Health check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["meta"], summary="Health check")
    def health():
        """Return 200 OK if the configured document source looks reachable."""
        viewer: ViewerSession = app.state.viewer
        source = viewer.controller.loader.source
        phase = viewer.controller.state.phase.value
        if cfg.source_is_url or Path(source).is_file():
            return {"status": "ok", "source": source, "phase": phase}
        return JSONResponse(
            status_code=503,
            content={"status": "no_document", "source": source, "phase": phase},
        )

    # ── Register routers ──────────────────────────────────────────────────────

    app.include_router(variables.router, prefix="/api/v1")

    # ── Static files + Jinja2 templates ───────────────────────────────────────
    _here = Path(__file__).parent.parent  # project root

    static_dir = _here / "static"
    templates_dir = _here / "templates"

    if static_dir.exists():
        app.mount("/static", StaticFiles(directory=str(static_dir)), name="static")

    if templates_dir.exists():
        templates = Jinja2Templates(directory=str(templates_dir))

        # Wire templates into the frontend router
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
