"""Health and readiness schemas for the scheduler service."""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """GET /health: the process is up; says nothing about Postgres."""

    status: str = Field(default="ok", description="Service status")
    service: str = Field(default="renotimeline-scheduler", description="Service name")


class ReadinessResponse(BaseModel):
    """GET /health/ready: Postgres answered, so a scheduler tick can run."""

    status: str = Field(default="ok", description="Readiness status")
    database: str = Field(default="ok", description="Postgres connectivity")


class ReadinessErrorResponse(BaseModel):
    """GET /health/ready when Postgres is unreachable (503); the cron caller should retry later."""

    status: str = Field(default="not_ready", description="Readiness status")
    database: str = Field(default="unreachable", description="Postgres connectivity")
    message: str = Field(..., description="Reason the tick cannot run")
