"""Task repository: read-only queries for due-date and overdue triggers."""

from __future__ import annotations

from datetime import date

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.task import OverdueTaskResult, TaskResult
from app.infrastructure.persistence.models.project import Profile, Project
from app.infrastructure.persistence.models.task import Task
from app.shared.enums import TERMINAL_TASK_STATUSES


def _to_result(t: Task) -> TaskResult:
    """Map Task ORM to TaskResult DTO."""
    return TaskResult(
        id=t.id,
        project_id=t.project_id,
        title=t.title,
        status=t.status,
        priority=t.priority,
        due_date=t.due_date,
        assigned_to=t.assigned_to,
        created_by=t.created_by,
    )


def _not_terminal():
    # NULL status counts as open.
    return or_(Task.status.is_(None), Task.status.not_in(TERMINAL_TASK_STATUSES))


class TaskRepository:
    """Task repository. Implements ITaskRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_due_on(
        self,
        project_id: str,
        due_date: date,
        *,
        priorities: list[str] | None = None,
    ) -> list[TaskResult]:
        q = select(Task).where(
            Task.project_id == project_id,
            Task.due_date == due_date,
            _not_terminal(),
        )
        if priorities:
            q = q.where(Task.priority.in_(priorities))
        q = q.order_by(Task.id.asc())
        result = await self.db.execute(q)
        return [_to_result(t) for t in result.scalars().all()]

    async def list_overdue(self, today: date) -> list[OverdueTaskResult]:
        q = (
            select(Task, Project.name, Profile)
            .join(Project, Project.id == Task.project_id)
            .outerjoin(Profile, Profile.id == Task.assigned_to)
            .where(
                Task.due_date.is_not(None),
                Task.due_date < today,
                _not_terminal(),
            )
            .order_by(Task.due_date.asc(), Task.id.asc())
        )
        result = await self.db.execute(q)
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
                project_name=project_name,
                assignee_name=assignee.display_name if assignee else None,
                assignee_email=assignee.email if assignee else None,
            )
            for t, project_name, assignee in result.all()
        ]
