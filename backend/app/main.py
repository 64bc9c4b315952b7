"""
TripPlanner Backend: FastAPI Application Factory
==================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() loads settings, builds the dependency container, registers
       middleware, exception handlers and routers, and returns the app.
Who:   uvicorn (`uvicorn app.main:create_app --factory`), the `tripplanner`
       console script and the test suite.

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                       FastAPI App                         │
    │                                                           │
    │  Middleware Chain:                                        │
    │  ┌────────┐ ┌─────────┐ ┌──────────┐ ┌──────┐ ┌──────┐    │
    │  │ Req ID │→│ Logging │→│ Security │→│ GZip │→│ CORS │    │
    │  └────────┘ └─────────┘ └──────────┘ └──────┘ └──────┘    │
    │                                                           │
    │  Routes (/api):                                           │
    │  trips · destinations · packing-items · users/* · health  │
    │                                                           │
    │  Exception Handlers:                                      │
    │  TripPlannerError → status_code │ RequestValidation → 400 │
    │  Exception → 500                                          │
    └───────────────────────────────────────────────────────────┘

Error body, for every failure: {"errors": ["message", ...]}
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Dict, List, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from app import __version__
from app.config import Settings, get_settings
from app.container import Container
from app.exceptions import TripPlannerError
from app.middleware.logging import RequestLoggingMiddleware
from app.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware, request_id_var
from app.middleware.security_headers import SecurityHeadersMiddleware
from app.routes import destinations, diary, health, packing_items, trips
from app.services.places_base import FuelStationProvider

logger = logging.getLogger(__name__)

_LOCATION_ROOTS = {"body", "query", "path", "header", "cookie"}


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger once for the whole process.

    Format: %(asctime)s [%(levelname)s] %(name)s: %(message)s, to stdout so
    the container runtime collects it.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request/per-query chatter from third-party libraries
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Startup logs where the server listens; shutdown closes the outbound HTTP
    client and disposes the engine's connection pool.
    """
    container: Container = app.state.container
    settings = container.settings

    logger.info("=" * 60)
    logger.info("TripPlanner Backend %s starting up...", __version__)
    logger.info("Database: %s", container.engine.url.render_as_string(hide_password=True))
    logger.info("Server ready at http://%s:%d", settings.host, settings.port)
    logger.info("API docs: http://%s:%d/docs", settings.host, settings.port)
    logger.info("=" * 60)

    yield

    logger.info("TripPlanner Backend shutting down...")
    await container.close()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _error_response(status_code: int, messages: List[str]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"errors": messages})


def format_validation_error(error: Dict[str, Any]) -> str:
    """
    Turn one pydantic error into a client-facing message.

    Messages raised by our own validators are passed through verbatim;
    everything else is prefixed with the dotted field path, e.g.
    "latitude: Input should be less than or equal to 90".
    """
    ctx = error.get("ctx") or {}
    if error.get("type") == "value_error" and "error" in ctx:
        message = str(ctx["error"])
    else:
        message = error.get("msg", "Invalid value")

    loc = list(error.get("loc") or ())
    if loc and loc[0] in _LOCATION_ROOTS:
        loc = loc[1:]
    field = ".".join(str(part) for part in loc)
    return f"{field}: {message}" if field else message


def register_exception_handlers(app: FastAPI) -> None:
    """
    Handler hierarchy:
        TripPlannerError        → exc.status_code (400/404/409/500)
        RequestValidationError  → 400, one message per failing field
        Exception (fallback)    → 500 "An unexpected error occurred"

    5xx bodies never carry internal details; those are logged server-side.
    """

    @app.exception_handler(TripPlannerError)
    async def handle_tripplanner_error(request: Request, exc: TripPlannerError):
        rid = request_id_var.get("")
        if exc.status_code >= 500:
            logger.error("[%s] %s | Context: %s", rid, exc.message, exc.context)
        else:
            logger.info("[%s] %s: %s", rid, type(exc).__name__, exc.message)
        return _error_response(exc.status_code, [exc.message])

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        messages = [format_validation_error(e) for e in exc.errors()]
        logger.info("[%s] Request validation failed: %s", request_id_var.get(""), messages)
        return _error_response(400, messages or ["Invalid request"])

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return _error_response(500, ["An unexpected error occurred"])


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(
    settings: Optional[Settings] = None,
    fuel_station_provider: Optional[FuelStationProvider] = None,
) -> FastAPI:
    """
    Assemble the application.

    Args:
        settings:              Defaults to get_settings(); missing DATABASE_URL
                               or GEOAPIFY_API_KEY raises here, before the
                               server binds its port.
        fuel_station_provider: Defaults to the Geoapify client built from
                               settings. Tests pass a fake.
    """
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(
        title="TripPlanner API",
        description=(
            "Plan trips, attach destinations with their own date windows, keep "
            "packing lists and a travel diary, and find fuel stations nearby."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.container = Container.build(settings, fuel_station_provider)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → Security → GZip → CORS
    origins = settings.cors_origins_list
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=[REQUEST_ID_HEADER],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(trips.router)
    app.include_router(destinations.router)
    app.include_router(packing_items.router)
    app.include_router(diary.router)
    app.include_router(health.router)

    return app


def main() -> None:
    """Console entry point: `tripplanner`."""
    settings = get_settings()
    uvicorn.run(
        "app.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
