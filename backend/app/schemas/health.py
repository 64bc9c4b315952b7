"""Health check response schema."""

from pydantic import Field

from app.schemas.common import CamelModel


class HealthResponse(CamelModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /api/health for monitoring and container probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
