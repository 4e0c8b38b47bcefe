"""DTOs for workflow definitions and executions (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class WorkflowDefinitionResult:
    """Workflow definition as read by the scanner and executor."""

    id: str
    project_id: str
    name: str
    trigger_type: str
    trigger_config: dict[str, Any]
    actions: list[dict[str, Any]]
    is_active: bool = True
    created_by: str | None = None
    last_executed: datetime | None = None
    conditions: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class WorkflowExecutionCreate:
    """Command for the pending execution row written before actions run."""

    workflow_id: str
    trigger_type: str
    trigger_date: date
    trigger_data: dict[str, Any]
    execution_time: datetime
    task_id: str | None = None


@dataclass(frozen=True)
class WorkflowExecutionResult:
    """Workflow execution audit row."""

    id: str
    workflow_id: str
    trigger_type: str
    trigger_date: date
    trigger_data: dict[str, Any]
    status: str
    execution_time: datetime
    task_id: str | None = None
    error_message: str | None = None
    executed_actions: list[dict[str, Any]] = field(default_factory=list)
    completed_at: datetime | None = None
