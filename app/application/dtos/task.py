"""DTOs for tasks read by the scheduler (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class TaskResult:
    """Kanban task fields the scheduler needs."""

    id: str
    project_id: str
    title: str
    status: str | None
    priority: str | None
    due_date: date | None
    assigned_to: str | None
    created_by: str


@dataclass(frozen=True)
class OverdueTaskResult(TaskResult):
    """Overdue task joined with project and assignee for the alert text."""

    project_name: str | None = None
    assignee_name: str | None = None
    assignee_email: str | None = None
