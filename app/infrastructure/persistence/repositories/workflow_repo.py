"""WorkflowDefinition repository (reads for the scanner, last_executed stamp)."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.workflow import WorkflowDefinitionResult
from app.infrastructure.persistence.models.workflow import WorkflowDefinition
from app.shared.utils.datetime import ensure_utc


def _to_result(w: WorkflowDefinition) -> WorkflowDefinitionResult:
    """Map WorkflowDefinition ORM to WorkflowDefinitionResult DTO."""
    return WorkflowDefinitionResult(
        id=w.id,
        project_id=w.project_id,
        name=w.name,
        trigger_type=w.trigger_type,
        trigger_config=dict(w.trigger_config or {}),
        actions=list(w.actions or []),
        is_active=w.is_active,
        created_by=w.created_by,
        last_executed=ensure_utc(w.last_executed),
        conditions=dict(w.conditions or {}),
    )


class WorkflowDefinitionRepository:
    """Workflow definition repository. Implements IWorkflowDefinitionRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_active_by_trigger(
        self, trigger_type: str, project_id: str | None = None
    ) -> list[WorkflowDefinitionResult]:
        q = select(WorkflowDefinition).where(
            WorkflowDefinition.trigger_type == trigger_type,
            WorkflowDefinition.is_active.is_(True),
        )
        if project_id is not None:
            q = q.where(WorkflowDefinition.project_id == project_id)
        q = q.order_by(WorkflowDefinition.created_at.asc(), WorkflowDefinition.id.asc())
        result = await self.db.execute(q)
        return [_to_result(w) for w in result.scalars().all()]

    async def mark_executed(self, workflow_id: str, executed_at: datetime) -> None:
        await self.db.execute(
            update(WorkflowDefinition)
            .where(WorkflowDefinition.id == workflow_id)
            .values(last_executed=executed_at)
        )
