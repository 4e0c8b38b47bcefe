"""In-memory repository fakes implementing the application protocols."""

from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import UTC, date, datetime
from typing import Any

from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.application.dtos.task import OverdueTaskResult, TaskResult
from app.application.dtos.workflow import (
    WorkflowDefinitionResult,
    WorkflowExecutionCreate,
    WorkflowExecutionResult,
)
from app.shared.enums import (
    TERMINAL_TASK_STATUSES,
    NotificationType,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)


def make_workflow(
    workflow_id: str = "wf-1",
    *,
    project_id: str = "proj-1",
    name: str = "Deadline reminder",
    trigger_type: str = WorkflowTriggerType.DUE_DATE_APPROACHING.value,
    trigger_config: dict[str, Any] | None = None,
    actions: list[dict[str, Any]] | None = None,
    is_active: bool = True,
    created_by: str | None = "owner-1",
    last_executed: datetime | None = None,
    conditions: dict[str, Any] | None = None,
) -> WorkflowDefinitionResult:
    return WorkflowDefinitionResult(
        id=workflow_id,
        project_id=project_id,
        name=name,
        trigger_type=trigger_type,
        trigger_config=trigger_config or {},
        actions=[{"type": "send_notification", "config": {}}] if actions is None else actions,
        is_active=is_active,
        created_by=created_by,
        last_executed=last_executed,
        conditions=conditions or {},
    )


def make_task(
    task_id: str = "task-1",
    *,
    project_id: str = "proj-1",
    title: str = "Install kitchen cabinets",
    status: str | None = "in_progress",
    priority: str | None = "medium",
    due_date: date | None = None,
    assigned_to: str | None = "user-assignee",
    created_by: str = "user-creator",
) -> TaskResult:
    return TaskResult(
        id=task_id,
        project_id=project_id,
        title=title,
        status=status,
        priority=priority,
        due_date=due_date,
        assigned_to=assigned_to,
        created_by=created_by,
    )


class FakeWorkflowRepo:
    def __init__(self, workflows: list[WorkflowDefinitionResult] | None = None) -> None:
        self.workflows = list(workflows or [])
        self.marked: dict[str, datetime] = {}
        self.fail_listing = False

    async def list_active_by_trigger(
        self, trigger_type: str, project_id: str | None = None
    ) -> list[WorkflowDefinitionResult]:
        if self.fail_listing:
            raise ConnectionError("workflow store unreachable")
        return [
            w
            for w in self.workflows
            if w.is_active
            and w.trigger_type == trigger_type
            and (project_id is None or w.project_id == project_id)
        ]

    async def mark_executed(self, workflow_id: str, executed_at: datetime) -> None:
        self.marked[workflow_id] = executed_at
        self.workflows = [
            replace(w, last_executed=executed_at) if w.id == workflow_id else w
            for w in self.workflows
        ]


class FakeTaskRepo:
    def __init__(
        self,
        tasks: list[TaskResult] | None = None,
        project_names: dict[str, str] | None = None,
    ) -> None:
        self.tasks = list(tasks or [])
        self.project_names = project_names or {}
        self.failing_projects: set[str] = set()
        self.due_on_calls: list[tuple[str, date, list[str] | None]] = []

    async def list_due_on(
        self, project_id: str, due_date: date, *, priorities: list[str] | None = None
    ) -> list[TaskResult]:
        self.due_on_calls.append((project_id, due_date, priorities))
        if project_id in self.failing_projects:
            raise RuntimeError(f"task query failed for {project_id}")
        return [
            t
            for t in self.tasks
            if t.project_id == project_id
            and t.due_date == due_date
            and t.status not in TERMINAL_TASK_STATUSES
            and (not priorities or t.priority in priorities)
        ]

    async def list_overdue(self, today: date) -> list[OverdueTaskResult]:
        return [
            OverdueTaskResult(
                id=t.id,
                project_id=t.project_id,
                title=t.title,
                status=t.status,
                priority=t.priority,
                due_date=t.due_date,
                assigned_to=t.assigned_to,
                created_by=t.created_by,
                project_name=self.project_names.get(t.project_id),
                assignee_name=None,
            )
            for t in self.tasks
            if t.due_date is not None
            and t.due_date < today
            and t.status not in TERMINAL_TASK_STATUSES
        ]


class FakeExecutionRepo:
    def __init__(self) -> None:
        self.rows: dict[str, WorkflowExecutionResult] = {}
        self._ids = itertools.count(1)

    @property
    def executions(self) -> list[WorkflowExecutionResult]:
        return list(self.rows.values())

    def _duplicate(self, workflow_id: str, task_id: str | None, day: date) -> bool:
        return any(
            r.workflow_id == workflow_id
            and r.task_id == task_id
            and r.trigger_date == day
            and r.trigger_type == WorkflowTriggerType.DUE_DATE_APPROACHING.value
            for r in self.rows.values()
        )

    async def create_pending(
        self, data: WorkflowExecutionCreate, *, unique_per_task_day: bool = False
    ) -> WorkflowExecutionResult | None:
        if unique_per_task_day and self._duplicate(data.workflow_id, data.task_id, data.trigger_date):
            return None
        row = WorkflowExecutionResult(
            id=f"exec-{next(self._ids)}",
            workflow_id=data.workflow_id,
            trigger_type=data.trigger_type,
            trigger_date=data.trigger_date,
            trigger_data=data.trigger_data,
            status=WorkflowExecutionStatus.PENDING.value,
            execution_time=data.execution_time,
            task_id=data.task_id,
        )
        self.rows[row.id] = row
        return row

    async def finalize(
        self,
        execution_id: str,
        *,
        status: str,
        executed_actions: list[dict[str, Any]],
        error_message: str | None,
        completed_at: datetime,
    ) -> WorkflowExecutionResult:
        row = replace(
            self.rows[execution_id],
            status=status,
            executed_actions=executed_actions,
            error_message=error_message,
            completed_at=completed_at,
        )
        self.rows[execution_id] = row
        return row

    async def exists_for_task_on_date(self, workflow_id: str, task_id: str, day: date) -> bool:
        return self._duplicate(workflow_id, task_id, day)


class FakeNotificationRepo:
    def __init__(self) -> None:
        self.notifications: list[NotificationResult] = []
        self.failing_users: set[str] = set()
        self._ids = itertools.count(1)

    async def insert(self, data: NotificationCreate) -> NotificationResult:
        if data.user_id in self.failing_users:
            raise RuntimeError(f"notification insert failed for {data.user_id}")
        row = NotificationResult(
            id=f"notif-{next(self._ids)}",
            user_id=data.user_id,
            type=data.type,
            title=data.title,
            message=data.message,
            notification_date=data.notification_date,
            project_id=data.project_id,
            task_id=data.task_id,
            workflow_id=data.workflow_id,
            workflow_execution_id=data.workflow_execution_id,
            priority=data.priority,
            metadata=dict(data.metadata),
            read=False,
            created_at=datetime.now(UTC),
        )
        self.notifications.append(row)
        return row

    async def insert_if_absent(self, data: NotificationCreate) -> NotificationResult | None:
        if data.task_id and await self.exists_for_task_on_date(
            data.task_id, data.type, data.notification_date
        ):
            return None
        return await self.insert(data)

    async def exists_for_task_on_date(
        self, task_id: str, notification_type: str, day: date
    ) -> bool:
        return any(
            n.task_id == task_id and n.type == notification_type and n.notification_date == day
            for n in self.notifications
        )

    def of_type(self, notification_type: str = NotificationType.OVERDUE.value) -> list[NotificationResult]:
        return [n for n in self.notifications if n.type == notification_type]
