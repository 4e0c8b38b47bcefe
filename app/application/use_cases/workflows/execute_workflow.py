"""Execute one workflow firing: pending execution row, actions, final status."""

from __future__ import annotations

from contextlib import nullcontext
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.application.dtos.notification import NotificationCreate
from app.application.dtos.workflow import WorkflowExecutionCreate
from app.application.services.workflow_actions import (
    SendNotificationAction,
    WorkflowAction,
    parse_action,
)
from app.domain.exceptions import InvalidActionConfigException, RenoTimelineException
from app.shared.enums import (
    NotificationPriority,
    NotificationType,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import SchedulerCalendar, utc_now

if TYPE_CHECKING:
    from app.application.dtos.workflow import (
        WorkflowDefinitionResult,
        WorkflowExecutionResult,
    )
    from app.application.interfaces.repositories import (
        INotificationRepository,
        IWorkflowExecutionRepository,
    )
    from app.application.interfaces.services import IsolationScope, ITemplateRenderer

logger = get_logger(__name__)

ACTION_SUCCESS = "success"
ACTION_FAILED = "failed"


def aggregate_status(outcomes: list[dict[str, Any]]) -> str:
    """success when nothing failed, failed when nothing succeeded, else partial."""
    succeeded = sum(1 for o in outcomes if o["status"] == ACTION_SUCCESS)
    failed = len(outcomes) - succeeded
    if failed == 0:
        return WorkflowExecutionStatus.SUCCESS.value
    if succeeded == 0:
        return WorkflowExecutionStatus.FAILED.value
    return WorkflowExecutionStatus.PARTIAL.value


def _default_texts(
    workflow: "WorkflowDefinitionResult", trigger_data: dict[str, Any]
) -> tuple[str, str]:
    task_title = trigger_data.get("task_title") or "task"
    trigger_type = trigger_data.get("type") or workflow.trigger_type
    if trigger_type == WorkflowTriggerType.DUE_DATE_APPROACHING.value:
        days = trigger_data.get("days_until_due")
        return (
            f"Deadline approaching: {task_title}",
            f'Workflow "{workflow.name}": task "{task_title}" is due in {days} day(s) '
            f"({trigger_data.get('due_date')}).",
        )
    if trigger_type == WorkflowTriggerType.TASK_STATUS_CHANGED.value:
        return (
            f"Status changed: {task_title}",
            f'Workflow "{workflow.name}": task "{task_title}" moved from '
            f"{trigger_data.get('from_status')} to {trigger_data.get('to_status')}.",
        )
    if trigger_type == WorkflowTriggerType.SCHEDULED.value:
        return (
            f"Scheduled workflow: {workflow.name}",
            f'Scheduled workflow "{workflow.name}" ran at {trigger_data.get("scheduled_time")}.',
        )
    return ("Automated action", f'Workflow "{workflow.name}" performed an automated action.')


def _template_context(
    workflow: "WorkflowDefinitionResult", trigger_data: dict[str, Any]
) -> dict[str, Any]:
    task = {
        "id": trigger_data.get("task_id"),
        "title": trigger_data.get("task_title"),
        "priority": trigger_data.get("task_priority"),
        "due_date": trigger_data.get("due_date"),
        "status": trigger_data.get("to_status"),
    }
    context: dict[str, Any] = dict(trigger_data)
    context.update(
        trigger=trigger_data,
        task=task,
        workflow={"id": workflow.id, "name": workflow.name},
    )
    return context


class WorkflowExecutor:
    """Runs a workflow's actions for one trigger snapshot and records the outcome.

    Phase 1 inserts a pending WorkflowExecution. Phase 2 runs every action in
    order; each action is isolated so a failure is recorded and siblings still
    run. Phase 3 finalizes the row with the aggregate status and tells the
    workflow owner whether the run succeeded.
    """

    def __init__(
        self,
        execution_repo: "IWorkflowExecutionRepository",
        notification_repo: "INotificationRepository",
        calendar: SchedulerCalendar,
        template_renderer: "ITemplateRenderer",
        *,
        isolation: "IsolationScope" = nullcontext,
    ) -> None:
        self._execution_repo = execution_repo
        self._notification_repo = notification_repo
        self._calendar = calendar
        self._renderer = template_renderer
        self._isolation = isolation

    async def execute(
        self,
        workflow: "WorkflowDefinitionResult",
        trigger_data: dict[str, Any],
        *,
        now: datetime | None = None,
    ) -> "WorkflowExecutionResult | None":
        """Execute the workflow for trigger_data.

        Returns the finalized execution, or None when a due-date firing for the
        same (workflow, task, day) was already recorded.
        """
        now = now or utc_now()
        task_id = trigger_data.get("task_id")
        trigger_type = trigger_data.get("type") or workflow.trigger_type
        pending = await self._execution_repo.create_pending(
            WorkflowExecutionCreate(
                workflow_id=workflow.id,
                trigger_type=trigger_type,
                trigger_date=self._calendar.today(now),
                trigger_data=trigger_data,
                execution_time=now,
                task_id=task_id,
            ),
            unique_per_task_day=(
                trigger_type == WorkflowTriggerType.DUE_DATE_APPROACHING.value
                and task_id is not None
            ),
        )
        if pending is None:
            logger.info(
                "Workflow %s already fired for task %s today; skipping",
                workflow.id,
                task_id,
            )
            return None

        outcomes: list[dict[str, Any]] = []
        for index, raw in enumerate(workflow.actions or []):
            outcomes.append(
                await self._run_isolated(index, raw, workflow, trigger_data, pending.id, now)
            )

        status = aggregate_status(outcomes)
        errors = [f"{o['type']}: {o['error']}" for o in outcomes if o["status"] == ACTION_FAILED]
        result = await self._execution_repo.finalize(
            pending.id,
            status=status,
            executed_actions=outcomes,
            error_message="; ".join(errors) or None,
            completed_at=utc_now(),
        )
        log = logger.warning if status != WorkflowExecutionStatus.SUCCESS.value else logger.info
        log(
            "Workflow %s (%s) execution %s finished with status %s (%d action(s))",
            workflow.name,
            workflow.id,
            pending.id,
            status,
            len(outcomes),
        )
        await self._notify_owner(workflow, result, trigger_data, now)
        return result

    async def _notify_owner(
        self,
        workflow: "WorkflowDefinitionResult",
        execution: "WorkflowExecutionResult",
        trigger_data: dict[str, Any],
        now: datetime,
    ) -> None:
        """Tell the workflow owner how the run went. Never changes the execution outcome."""
        if not workflow.created_by:
            return
        succeeded = execution.status == WorkflowExecutionStatus.SUCCESS.value
        if succeeded:
            title = f'Workflow "{workflow.name}" executed'
            message = f'Automation "{workflow.name}" completed successfully.'
        else:
            title = f'Workflow "{workflow.name}" failed'
            message = f'Automation "{workflow.name}" finished with status {execution.status}.'
            if execution.error_message:
                message = f"{message} Error: {execution.error_message}"
        try:
            async with self._isolation():
                await self._notification_repo.insert(
                    NotificationCreate(
                        user_id=workflow.created_by,
                        type=(
                            NotificationType.WORKFLOW_EXECUTED.value
                            if succeeded
                            else NotificationType.WORKFLOW_FAILED.value
                        ),
                        title=title,
                        message=message,
                        notification_date=self._calendar.today(now),
                        project_id=trigger_data.get("project_id") or workflow.project_id,
                        task_id=trigger_data.get("task_id"),
                        workflow_id=workflow.id,
                        workflow_execution_id=execution.id,
                        priority=(
                            NotificationPriority.MEDIUM.value
                            if succeeded
                            else NotificationPriority.HIGH.value
                        ),
                        metadata={
                            "workflow_name": workflow.name,
                            "execution_status": execution.status,
                            "executed_actions": execution.executed_actions,
                            "error": execution.error_message,
                        },
                    )
                )
        except Exception:
            logger.exception(
                "Could not notify owner of workflow %s about execution %s",
                workflow.id,
                execution.id,
            )

    async def _run_isolated(
        self,
        index: int,
        raw: Any,
        workflow: "WorkflowDefinitionResult",
        trigger_data: dict[str, Any],
        execution_id: str,
        now: datetime,
    ) -> dict[str, Any]:
        action_type = raw.get("type") if isinstance(raw, dict) else None
        outcome: dict[str, Any] = {"index": index, "type": action_type}
        try:
            async with self._isolation():
                action = parse_action(raw, workflow_id=workflow.id)
                outcome.update(
                    await self._dispatch(action, workflow, trigger_data, execution_id, now)
                )
        except RenoTimelineException as exc:
            logger.warning(
                "Workflow %s action #%d (%s) failed: %s",
                workflow.id,
                index,
                action_type,
                exc.message,
            )
            outcome.update(status=ACTION_FAILED, error=exc.message)
            return outcome
        except Exception as exc:
            logger.exception(
                "Workflow %s action #%d (%s) raised", workflow.id, index, action_type
            )
            outcome.update(status=ACTION_FAILED, error=str(exc) or type(exc).__name__)
            return outcome
        outcome["status"] = ACTION_SUCCESS
        return outcome

    async def _dispatch(
        self,
        action: WorkflowAction,
        workflow: "WorkflowDefinitionResult",
        trigger_data: dict[str, Any],
        execution_id: str,
        now: datetime,
    ) -> dict[str, Any]:
        if isinstance(action, SendNotificationAction):
            return await self._send_notification(
                action, workflow, trigger_data, execution_id, now
            )
        raise InvalidActionConfigException(action.type, "no handler registered")

    async def _send_notification(
        self,
        action: SendNotificationAction,
        workflow: "WorkflowDefinitionResult",
        trigger_data: dict[str, Any],
        execution_id: str,
        now: datetime,
    ) -> dict[str, Any]:
        recipient_id = (
            action.recipient_id
            or trigger_data.get("user_id")
            or trigger_data.get("assigned_to")
            or trigger_data.get("created_by")
            or workflow.created_by
        )
        if not recipient_id:
            raise InvalidActionConfigException(action.type, "no recipient could be resolved")

        default_title, default_message = _default_texts(workflow, trigger_data)
        context = _template_context(workflow, trigger_data)
        title = self._renderer.render(action.title, context) if action.title else default_title
        message = (
            self._renderer.render(action.message, context) if action.message else default_message
        )

        notification = await self._notification_repo.insert(
            NotificationCreate(
                user_id=recipient_id,
                type=action.notification_type,
                title=title or default_title,
                message=message or default_message,
                notification_date=self._calendar.today(now),
                project_id=trigger_data.get("project_id") or workflow.project_id,
                task_id=trigger_data.get("task_id"),
                workflow_id=workflow.id,
                workflow_execution_id=execution_id,
                priority=action.priority,
                metadata={
                    "workflow_name": workflow.name,
                    "action_type": action.type,
                    "trigger_type": trigger_data.get("type") or workflow.trigger_type,
                },
            )
        )
        return {"notification_id": notification.id, "recipient_id": recipient_id}
