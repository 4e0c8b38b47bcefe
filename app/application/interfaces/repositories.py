"""Repository interfaces (ports) for the application layer.

Protocols define contracts for persistence; infrastructure implements them
with SQLAlchemy, tests with in-memory fakes.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from app.application.dtos.notification import NotificationCreate, NotificationResult
    from app.application.dtos.task import OverdueTaskResult, TaskResult
    from app.application.dtos.workflow import (
        WorkflowDefinitionResult,
        WorkflowExecutionCreate,
        WorkflowExecutionResult,
    )


class IWorkflowDefinitionRepository(Protocol):
    """Protocol for workflow definition reads (and the last_executed stamp)."""

    async def list_active_by_trigger(
        self, trigger_type: str, project_id: str | None = None
    ) -> list[WorkflowDefinitionResult]:
        """Return active definitions for the trigger type, optionally for one project."""

    async def mark_executed(self, workflow_id: str, executed_at: datetime) -> None:
        """Set last_executed on the definition."""


class ITaskRepository(Protocol):
    """Protocol for read-only task queries used by the trigger scanner."""

    async def list_due_on(
        self,
        project_id: str,
        due_date: date,
        *,
        priorities: list[str] | None = None,
    ) -> list[TaskResult]:
        """Non-terminal tasks in the project due exactly on due_date."""

    async def list_overdue(self, today: date) -> list[OverdueTaskResult]:
        """Non-terminal tasks with due_date strictly before today, with project/assignee info."""


class IWorkflowExecutionRepository(Protocol):
    """Protocol for the append-only workflow execution log."""

    async def create_pending(
        self, data: WorkflowExecutionCreate, *, unique_per_task_day: bool = False
    ) -> WorkflowExecutionResult | None:
        """Insert a pending execution.

        With unique_per_task_day, returns None instead of inserting when an
        execution for (workflow, task, trigger_date) already exists.
        """

    async def finalize(
        self,
        execution_id: str,
        *,
        status: str,
        executed_actions: list[dict[str, Any]],
        error_message: str | None,
        completed_at: datetime,
    ) -> WorkflowExecutionResult:
        """Write the final status and per-action outcomes of a pending execution."""

    async def exists_for_task_on_date(
        self, workflow_id: str, task_id: str, day: date
    ) -> bool:
        """Whether the workflow already fired for the task on that calendar day."""


class INotificationRepository(Protocol):
    """Protocol for the notification sink."""

    async def insert(self, data: NotificationCreate) -> NotificationResult:
        """Insert a notification and return it."""

    async def insert_if_absent(
        self, data: NotificationCreate
    ) -> NotificationResult | None:
        """Insert unless a same-day notification of that type exists for the task; None if skipped."""

    async def exists_for_task_on_date(
        self, task_id: str, notification_type: str, day: date
    ) -> bool:
        """Whether a notification of the type exists for the task on that calendar day."""
