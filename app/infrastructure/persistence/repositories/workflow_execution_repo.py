"""WorkflowExecution repository: append-only execution log."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import WorkflowExecutionCreate, WorkflowExecutionResult
from app.domain.exceptions import ResourceNotFoundException
from app.infrastructure.persistence.models.workflow import WorkflowExecution
from app.shared.enums import WorkflowExecutionStatus, WorkflowTriggerType
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc

logger = get_logger(__name__)


def _to_result(e: WorkflowExecution) -> WorkflowExecutionResult:
    """Map WorkflowExecution ORM to WorkflowExecutionResult DTO."""
    return WorkflowExecutionResult(
        id=e.id,
        workflow_id=e.workflow_id,
        trigger_type=e.trigger_type,
        trigger_date=e.trigger_date,
        trigger_data=dict(e.trigger_data or {}),
        status=e.status,
        execution_time=ensure_utc(e.execution_time),
        task_id=e.task_id,
        error_message=e.error_message,
        executed_actions=list(e.executed_actions or []),
        completed_at=ensure_utc(e.completed_at),
    )


class WorkflowExecutionRepository:
    """Workflow execution repository. Implements IWorkflowExecutionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create_pending(
        self, data: WorkflowExecutionCreate, *, unique_per_task_day: bool = False
    ) -> WorkflowExecutionResult | None:
        """Insert a pending execution.

        With unique_per_task_day the insert runs in a savepoint; a violation of
        the (workflow_id, task_id, trigger_date) partial unique index means a
        concurrent tick already recorded this firing and None is returned.
        """
        execution = WorkflowExecution(
            workflow_id=data.workflow_id,
            trigger_type=data.trigger_type,
            task_id=data.task_id,
            trigger_date=data.trigger_date,
            trigger_data=data.trigger_data,
            status=WorkflowExecutionStatus.PENDING.value,
            executed_actions=[],
            execution_time=data.execution_time,
        )
        if not unique_per_task_day:
            self.db.add(execution)
            await self.db.flush()
            return _to_result(execution)
        try:
            async with self.db.begin_nested():
                self.db.add(execution)
                await self.db.flush()
        except IntegrityError:
            # Savepoint rolled back; another tick owns this (workflow, task, day)
            logger.info(
                "Execution for workflow %s task %s on %s already exists",
                data.workflow_id,
                data.task_id,
                data.trigger_date,
            )
            return None
        return _to_result(execution)

    async def finalize(
        self,
        execution_id: str,
        *,
        status: str,
        executed_actions: list[dict[str, Any]],
        error_message: str | None,
        completed_at: datetime,
    ) -> WorkflowExecutionResult:
        execution = await self.db.get(WorkflowExecution, execution_id)
        if execution is None:
            raise ResourceNotFoundException("workflow_execution", execution_id)
        execution.status = status
        execution.executed_actions = executed_actions
        execution.error_message = error_message
        execution.completed_at = completed_at
        await self.db.flush()
        return _to_result(execution)

    async def exists_for_task_on_date(
        self, workflow_id: str, task_id: str, day: date
    ) -> bool:
        result = await self.db.execute(
            select(WorkflowExecution.id)
            .where(
                WorkflowExecution.workflow_id == workflow_id,
                WorkflowExecution.task_id == task_id,
                WorkflowExecution.trigger_date == day,
                WorkflowExecution.trigger_type
                == WorkflowTriggerType.DUE_DATE_APPROACHING.value,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
