"""Trigger scanner: find newly satisfied (workflow, entity) pairs once per tick."""

from __future__ import annotations

from contextlib import nullcontext
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING, Any

from app.application.dtos.notification import NotificationCreate
from app.application.dtos.scheduler import ScanResult
from app.application.services.conditions import conditions_met
from app.application.services.schedule import ScheduleEvaluator
from app.shared.enums import (
    NotificationPriority,
    NotificationType,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import SchedulerCalendar, utc_now

if TYPE_CHECKING:
    from app.application.dtos.task import OverdueTaskResult, TaskResult
    from app.application.dtos.workflow import (
        WorkflowDefinitionResult,
        WorkflowExecutionResult,
    )
    from app.application.interfaces.repositories import (
        INotificationRepository,
        ITaskRepository,
        IWorkflowDefinitionRepository,
        IWorkflowExecutionRepository,
    )
    from app.application.interfaces.services import IsolationScope
    from app.application.use_cases.workflows.execute_workflow import WorkflowExecutor

logger = get_logger(__name__)

DEFAULT_DAYS_BEFORE = 1
DEFAULT_WINDOW_MINUTES = 15


def resolve_days_before(config: dict[str, Any] | None, default: int) -> int:
    """days_before from trigger_config; non-integer or negative values use the default."""
    value = (config or {}).get("days_before")
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return default
    return value


def resolve_priority_filter(config: dict[str, Any] | None) -> list[str] | None:
    """priority_filter from trigger_config; None (no filtering) unless a non-empty list."""
    value = (config or {}).get("priority_filter")
    if not isinstance(value, list) or not value:
        return None
    return [str(p) for p in value]


def due_date_payload(
    workflow: "WorkflowDefinitionResult", task: "TaskResult", days_before: int
) -> dict[str, Any]:
    return {
        "type": WorkflowTriggerType.DUE_DATE_APPROACHING.value,
        "project_id": workflow.project_id,
        "task_id": task.id,
        "task_title": task.title,
        "task_priority": task.priority,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "days_until_due": days_before,
        "assigned_to": task.assigned_to,
        "created_by": task.created_by,
    }


def scheduled_payload(workflow: "WorkflowDefinitionResult", now: datetime) -> dict[str, Any]:
    return {
        "type": WorkflowTriggerType.SCHEDULED.value,
        "project_id": workflow.project_id,
        "scheduled_time": now.isoformat(),
        "workflow_name": workflow.name,
        "created_by": workflow.created_by,
    }


def overdue_notification(
    task: "OverdueTaskResult", today: date, days_overdue: int
) -> NotificationCreate:
    return NotificationCreate(
        user_id=task.assigned_to or task.created_by,
        type=NotificationType.OVERDUE.value,
        title="Task overdue",
        message=f'Task "{task.title}" is {days_overdue} day(s) overdue',
        notification_date=today,
        project_id=task.project_id,
        task_id=task.id,
        priority=NotificationPriority.HIGH.value,
        metadata={
            "days_overdue": days_overdue,
            "due_date": task.due_date.isoformat() if task.due_date else None,
            "project_name": task.project_name,
            "assignee_name": task.assignee_name,
        },
    )


class TriggerScanner:
    """Evaluates every active trigger once and forwards matches to the executor.

    The three scans run in a fixed order: due-date approaching, scheduled,
    overdue. Each workflow and each task is processed in its own isolation
    scope; a failure is logged, counted and the scan continues. Failing to
    list definitions or overdue tasks propagates and fails the tick.
    """

    def __init__(
        self,
        workflow_repo: "IWorkflowDefinitionRepository",
        task_repo: "ITaskRepository",
        execution_repo: "IWorkflowExecutionRepository",
        notification_repo: "INotificationRepository",
        executor: "WorkflowExecutor",
        calendar: SchedulerCalendar,
        *,
        window_minutes: int = DEFAULT_WINDOW_MINUTES,
        default_days_before: int = DEFAULT_DAYS_BEFORE,
        isolation: "IsolationScope" = nullcontext,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._task_repo = task_repo
        self._execution_repo = execution_repo
        self._notification_repo = notification_repo
        self._executor = executor
        self._calendar = calendar
        self._schedule = ScheduleEvaluator(calendar, timedelta(minutes=window_minutes))
        self._default_days_before = default_days_before
        self._isolation = isolation

    async def run(self, now: datetime | None = None) -> ScanResult:
        """Run one tick and return its counters."""
        now = now or utc_now()
        result = ScanResult(started_at=now)
        logger.info(
            "Scheduler tick started at %s (scheduler day %s)",
            now.isoformat(),
            self._calendar.today(now),
        )
        await self.scan_due_date_approaching(now, result)
        await self.scan_scheduled(now, result)
        await self.scan_overdue(now, result)
        logger.info("Scheduler tick finished: %s", result.to_summary())
        return result

    async def scan_due_date_approaching(self, now: datetime, result: ScanResult) -> None:
        today = self._calendar.today(now)
        workflows = await self._workflow_repo.list_active_by_trigger(
            WorkflowTriggerType.DUE_DATE_APPROACHING.value
        )
        logger.debug("Evaluating %d due_date_approaching workflow(s)", len(workflows))
        for workflow in workflows:
            result.workflows_evaluated += 1
            days_before = resolve_days_before(workflow.trigger_config, self._default_days_before)
            threshold = today + timedelta(days=days_before)
            try:
                async with self._isolation():
                    tasks = await self._task_repo.list_due_on(
                        workflow.project_id,
                        threshold,
                        priorities=resolve_priority_filter(workflow.trigger_config),
                    )
            except Exception:
                logger.exception("Failed to list tasks for workflow %s", workflow.id)
                result.items_failed += 1
                continue

            for task in tasks:
                payload = due_date_payload(workflow, task, days_before)
                if not conditions_met(workflow.conditions, payload):
                    logger.debug(
                        "Workflow %s conditions not met for task %s", workflow.id, task.id
                    )
                    continue
                try:
                    async with self._isolation():
                        if await self._execution_repo.exists_for_task_on_date(
                            workflow.id, task.id, today
                        ):
                            logger.debug(
                                "Workflow %s already fired for task %s on %s",
                                workflow.id,
                                task.id,
                                today,
                            )
                            result.skipped_duplicates += 1
                            continue
                        execution = await self._executor.execute(workflow, payload, now=now)
                    self._record(result, execution)
                except Exception:
                    logger.exception(
                        "Due-date workflow %s failed for task %s", workflow.id, task.id
                    )
                    result.items_failed += 1

    async def scan_scheduled(self, now: datetime, result: ScanResult) -> None:
        workflows = await self._workflow_repo.list_active_by_trigger(
            WorkflowTriggerType.SCHEDULED.value
        )
        logger.debug("Evaluating %d scheduled workflow(s)", len(workflows))
        for workflow in workflows:
            result.workflows_evaluated += 1
            try:
                if not self._schedule.should_fire(
                    workflow.trigger_config,
                    workflow.last_executed,
                    now,
                    workflow_name=workflow.name,
                ):
                    continue
                async with self._isolation():
                    execution = await self._executor.execute(
                        workflow, scheduled_payload(workflow, now), now=now
                    )
                    if execution is not None:
                        await self._workflow_repo.mark_executed(workflow.id, now)
                self._record(result, execution)
            except Exception:
                logger.exception("Scheduled workflow %s failed", workflow.id)
                result.items_failed += 1

    async def scan_overdue(self, now: datetime, result: ScanResult) -> None:
        today = self._calendar.today(now)
        tasks = await self._task_repo.list_overdue(today)
        logger.debug("Found %d overdue task(s)", len(tasks))
        for task in tasks:
            try:
                async with self._isolation():
                    if await self._notification_repo.exists_for_task_on_date(
                        task.id, NotificationType.OVERDUE.value, today
                    ):
                        result.skipped_duplicates += 1
                        continue
                    days_overdue = (
                        self._calendar.days_since(task.due_date, now) if task.due_date else 0
                    )
                    created = await self._notification_repo.insert_if_absent(
                        overdue_notification(task, today, days_overdue)
                    )
                if created is None:
                    result.skipped_duplicates += 1
                else:
                    result.notifications_created += 1
            except Exception:
                logger.exception("Overdue alert failed for task %s", task.id)
                result.items_failed += 1

    @staticmethod
    def _record(result: ScanResult, execution: "WorkflowExecutionResult | None") -> None:
        if execution is None:
            result.skipped_duplicates += 1
            return
        result.workflows_triggered += 1
        result.execution_ids.append(execution.id)
        if execution.status == WorkflowExecutionStatus.FAILED.value:
            result.executions_failed += 1
