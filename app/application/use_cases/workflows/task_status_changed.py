"""Event-driven trigger: run task_status_changed workflows for a Kanban move."""

from __future__ import annotations

from contextlib import nullcontext
from datetime import datetime
from typing import TYPE_CHECKING, Any

from app.application.services.conditions import conditions_met
from app.shared.enums import WorkflowTriggerType
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

if TYPE_CHECKING:
    from app.application.dtos.scheduler import TaskStatusChangedEvent
    from app.application.dtos.workflow import (
        WorkflowDefinitionResult,
        WorkflowExecutionResult,
    )
    from app.application.interfaces.repositories import IWorkflowDefinitionRepository
    from app.application.interfaces.services import IsolationScope
    from app.application.use_cases.workflows.execute_workflow import WorkflowExecutor

logger = get_logger(__name__)


def matches_transition(config: dict[str, Any] | None, from_status: str, to_status: str) -> bool:
    """A missing from_status/to_status in trigger_config matches any status."""
    config = config or {}
    expected_from = config.get("from_status")
    expected_to = config.get("to_status")
    if expected_from and expected_from != from_status:
        return False
    if expected_to and expected_to != to_status:
        return False
    return True


def status_changed_payload(event: "TaskStatusChangedEvent", now: datetime) -> dict[str, Any]:
    return {
        "type": WorkflowTriggerType.TASK_STATUS_CHANGED.value,
        "project_id": event.project_id,
        "task_id": event.task_id,
        "task_title": event.task_title,
        "task_priority": event.task_priority,
        "assigned_to": event.assigned_to,
        "from_status": event.from_status,
        "to_status": event.to_status,
        "user_id": event.user_id,
        "timestamp": now.isoformat(),
    }


class TaskStatusChangedTrigger:
    """Matches a status change against the project's active workflows and executes them."""

    def __init__(
        self,
        workflow_repo: "IWorkflowDefinitionRepository",
        executor: "WorkflowExecutor",
        *,
        isolation: "IsolationScope" = nullcontext,
    ) -> None:
        self._workflow_repo = workflow_repo
        self._executor = executor
        self._isolation = isolation

    async def process(
        self, event: "TaskStatusChangedEvent", now: datetime | None = None
    ) -> list["WorkflowExecutionResult"]:
        now = now or utc_now()
        if event.from_status == event.to_status:
            return []
        workflows: list[WorkflowDefinitionResult] = await self._workflow_repo.list_active_by_trigger(
            WorkflowTriggerType.TASK_STATUS_CHANGED.value, project_id=event.project_id
        )
        payload = status_changed_payload(event, now)
        executions: list[WorkflowExecutionResult] = []
        for workflow in workflows:
            if not matches_transition(workflow.trigger_config, event.from_status, event.to_status):
                continue
            if not conditions_met(workflow.conditions, payload):
                logger.debug("Workflow %s conditions not met for task %s", workflow.id, event.task_id)
                continue
            try:
                async with self._isolation():
                    execution = await self._executor.execute(workflow, dict(payload), now=now)
            except Exception:
                logger.exception(
                    "Workflow %s failed for status change of task %s", workflow.id, event.task_id
                )
                continue
            if execution is not None:
                executions.append(execution)
        logger.info(
            "Task %s %s -> %s: %d workflow(s) executed",
            event.task_id,
            event.from_status,
            event.to_status,
            len(executions),
        )
        return executions
