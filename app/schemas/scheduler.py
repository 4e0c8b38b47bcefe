"""Scheduler tick and trigger hook API schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.shared.enums import TaskPriority, TaskStatus


class SchedulerSummary(BaseModel):
    """Counters of one scheduler tick."""

    started_at: datetime
    workflows_evaluated: int = 0
    workflows_triggered: int = 0
    executions_failed: int = 0
    notifications_created: int = 0
    skipped_duplicates: int = 0
    items_failed: int = 0
    execution_ids: list[str] = Field(default_factory=list)


class SchedulerRunResponse(BaseModel):
    """Response for POST /scheduler/run (200 on success, 500 on top-level failure)."""

    success: bool
    message: str | None = None
    error: str | None = None
    timestamp: datetime
    summary: SchedulerSummary | None = None

    @classmethod
    def from_summary(cls, summary: dict[str, Any], timestamp: datetime) -> "SchedulerRunResponse":
        return cls(
            success=True,
            message="Workflow scheduler completed",
            timestamp=timestamp,
            summary=SchedulerSummary(**summary),
        )


class TaskStatusChangedRequest(BaseModel):
    """Body for POST /workflows/triggers/task-status-changed."""

    task_id: str = Field(..., min_length=1)
    project_id: str = Field(..., min_length=1)
    from_status: TaskStatus
    to_status: TaskStatus
    user_id: str = Field(..., min_length=1)
    task_title: str | None = None
    task_priority: TaskPriority | None = None
    assigned_to: str | None = None


class TriggeredExecution(BaseModel):
    """One execution created by a trigger hook."""

    id: str
    workflow_id: str
    status: str


class TaskStatusChangedResponse(BaseModel):
    """Response for POST /workflows/triggers/task-status-changed."""

    success: bool = True
    executions: list[TriggeredExecution] = Field(default_factory=list)
    timestamp: datetime
