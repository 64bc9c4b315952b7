"""
TripPlanner Backend: Health Check Route
=========================================

What:  Liveness/readiness probe for container health checks.
How:   Runs SELECT 1 against the application's engine and reports the
       result together with version and uptime.

Status levels:
    healthy:   database reachable
    unhealthy: database unreachable (still HTTP 200 so the body is readable;
               probes should look at the status field)
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import __version__
from app.container import Container
from app.dependencies import get_container
from app.schemas.health import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(container: Container = Depends(get_container)) -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with container.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
