"""Pydantic request/response schemas for the API."""

from app.schemas.health import (
    HealthResponse,
    ReadinessErrorResponse,
    ReadinessResponse,
)
from app.schemas.scheduler import (
    SchedulerRunResponse,
    SchedulerSummary,
    TaskStatusChangedRequest,
    TaskStatusChangedResponse,
    TriggeredExecution,
)

__all__ = [
    "HealthResponse",
    "ReadinessErrorResponse",
    "ReadinessResponse",
    "SchedulerRunResponse",
    "SchedulerSummary",
    "TaskStatusChangedRequest",
    "TaskStatusChangedResponse",
    "TriggeredExecution",
]
