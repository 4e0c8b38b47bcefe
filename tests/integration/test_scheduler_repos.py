"""Scheduler repositories against PostgreSQL.

Requires DATABASE_URL with `alembic upgrade head` applied; skipped otherwise.
Every test runs in a transaction that the db_session fixture rolls back.
"""

from datetime import UTC, date, datetime, timedelta

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import NotificationCreate
from app.application.dtos.scheduler import ScanResult
from app.application.dtos.workflow import WorkflowExecutionCreate
from app.application.use_cases.workflows import TriggerScanner
from app.core.config import get_settings
from app.infrastructure.persistence.models import (
    Profile,
    Project,
    Task,
    WorkflowDefinition,
)
from app.infrastructure.persistence.repositories import (
    NotificationRepository,
    TaskRepository,
    WorkflowDefinitionRepository,
    WorkflowExecutionRepository,
)
from app.infrastructure.persistence.scheduler_lock import PostgresAdvisoryLock
from app.infrastructure.services.workflow_scheduler import (
    build_workflow_executor,
    savepoint_scope,
)
from app.shared.utils.datetime import SchedulerCalendar

pytestmark = pytest.mark.requires_db

TODAY = date(2025, 6, 2)
NOW = datetime(2025, 6, 2, 9, 0, tzinfo=UTC)


async def _seed(db: AsyncSession) -> dict[str, str]:
    project = Project(name="Kitchen remodel")
    profile = Profile(first_name="Ada", last_name="Builder", email="ada@example.com")
    db.add_all([project, profile])
    await db.flush()
    tasks = [
        Task(project_id=project.id, title="Cabinets", status="in_progress", priority="high",
             due_date=TODAY + timedelta(days=2), assigned_to=profile.id, created_by="creator"),
        Task(project_id=project.id, title="Counter", status="done", priority="high",
             due_date=TODAY + timedelta(days=2), created_by="creator"),
        Task(project_id=project.id, title="Backsplash", status=None, priority="low",
             due_date=TODAY + timedelta(days=2), created_by="creator"),
        Task(project_id=project.id, title="Demolition", status="todo", priority="medium",
             due_date=TODAY - timedelta(days=3), assigned_to=profile.id, created_by="creator"),
    ]
    db.add_all(tasks)
    workflow = WorkflowDefinition(
        project_id=project.id,
        name="Deadline reminder",
        trigger_type="due_date_approaching",
        trigger_config={"days_before": 2},
        conditions={"priority": "high"},
        actions=[{"type": "send_notification", "config": {}}],
        created_by="owner",
    )
    inactive = WorkflowDefinition(
        project_id=project.id,
        name="Disabled",
        trigger_type="due_date_approaching",
        actions=[],
        is_active=False,
    )
    db.add_all([workflow, inactive])
    await db.flush()
    return {
        "project": project.id,
        "profile": profile.id,
        "cabinets": tasks[0].id,
        "backsplash": tasks[2].id,
        "demolition": tasks[3].id,
        "workflow": workflow.id,
    }


async def test_list_active_by_trigger_and_mark_executed(db_session: AsyncSession) -> None:
    ids = await _seed(db_session)
    repo = WorkflowDefinitionRepository(db_session)

    workflows = await repo.list_active_by_trigger("due_date_approaching", project_id=ids["project"])
    assert [w.id for w in workflows] == [ids["workflow"]]
    assert workflows[0].trigger_config == {"days_before": 2}
    assert workflows[0].conditions == {"priority": "high"}

    await repo.mark_executed(ids["workflow"], NOW)
    [reloaded] = await repo.list_active_by_trigger("due_date_approaching", project_id=ids["project"])
    assert reloaded.last_executed == NOW


async def test_list_due_on_excludes_done_and_keeps_null_status(db_session: AsyncSession) -> None:
    ids = await _seed(db_session)
    repo = TaskRepository(db_session)

    due = await repo.list_due_on(ids["project"], TODAY + timedelta(days=2))
    assert {t.id for t in due} == {ids["cabinets"], ids["backsplash"]}

    high_only = await repo.list_due_on(ids["project"], TODAY + timedelta(days=2), priorities=["high"])
    assert [t.id for t in high_only] == [ids["cabinets"]]

    assert await repo.list_due_on(ids["project"], TODAY + timedelta(days=1)) == []


async def test_list_overdue_joins_project_and_assignee(db_session: AsyncSession) -> None:
    ids = await _seed(db_session)

    overdue = await TaskRepository(db_session).list_overdue(TODAY)

    mine = [t for t in overdue if t.project_id == ids["project"]]
    assert [t.id for t in mine] == [ids["demolition"]]
    assert mine[0].project_name == "Kitchen remodel"
    assert mine[0].assignee_name == "Ada Builder"
    assert mine[0].assignee_email == "ada@example.com"


async def test_due_date_execution_unique_per_task_per_day(db_session: AsyncSession) -> None:
    ids = await _seed(db_session)
    repo = WorkflowExecutionRepository(db_session)
    data = WorkflowExecutionCreate(
        workflow_id=ids["workflow"],
        trigger_type="due_date_approaching",
        trigger_date=TODAY,
        trigger_data={"task_id": ids["cabinets"]},
        execution_time=NOW,
        task_id=ids["cabinets"],
    )

    first = await repo.create_pending(data, unique_per_task_day=True)
    duplicate = await repo.create_pending(data, unique_per_task_day=True)

    assert first is not None
    assert first.status == "pending"
    assert duplicate is None
    assert await repo.exists_for_task_on_date(ids["workflow"], ids["cabinets"], TODAY)
    assert not await repo.exists_for_task_on_date(
        ids["workflow"], ids["cabinets"], TODAY + timedelta(days=1)
    )

    finalized = await repo.finalize(
        first.id,
        status="success",
        executed_actions=[{"index": 0, "type": "send_notification", "status": "success"}],
        error_message=None,
        completed_at=NOW,
    )
    assert finalized.status == "success"
    assert finalized.completed_at == NOW


async def test_overdue_notification_unique_per_task_per_day(db_session: AsyncSession) -> None:
    ids = await _seed(db_session)
    repo = NotificationRepository(db_session)
    data = NotificationCreate(
        user_id=ids["profile"],
        type="overdue",
        title="Task overdue",
        message='Task "Demolition" is 3 day(s) overdue',
        notification_date=TODAY,
        project_id=ids["project"],
        task_id=ids["demolition"],
        priority="high",
        metadata={"days_overdue": 3},
    )

    first = await repo.insert_if_absent(data)
    duplicate = await repo.insert_if_absent(data)

    assert first is not None
    assert first.read is False
    assert first.metadata == {"days_overdue": 3}
    assert duplicate is None
    assert await repo.exists_for_task_on_date(ids["demolition"], "overdue", TODAY)


async def test_advisory_lock_acquired_in_transaction(db_session: AsyncSession) -> None:
    assert await PostgresAdvisoryLock(db_session).try_acquire() is True


class _BrokenProjectTaskRepository(TaskRepository):
    """Runs a failing statement when listing tasks for one project."""

    def __init__(self, db: AsyncSession, broken_project_id: str) -> None:
        super().__init__(db)
        self.broken_project_id = broken_project_id

    async def list_due_on(self, project_id, due_date, *, priorities=None):
        if project_id == self.broken_project_id:
            await self.db.execute(text("SELECT 1 / 0"))
        return await super().list_due_on(project_id, due_date, priorities=priorities)


async def test_failed_task_query_does_not_abort_the_tick(db_session: AsyncSession) -> None:
    ids = await _seed(db_session)
    broken = Project(name="Broken project")
    db_session.add(broken)
    await db_session.flush()
    db_session.add(
        WorkflowDefinition(
            project_id=broken.id,
            name="Broken reminder",
            trigger_type="due_date_approaching",
            trigger_config={"days_before": 2},
            actions=[{"type": "send_notification", "config": {}}],
        )
    )
    await db_session.flush()
    settings = get_settings()
    scanner = TriggerScanner(
        workflow_repo=WorkflowDefinitionRepository(db_session),
        task_repo=_BrokenProjectTaskRepository(db_session, broken.id),
        execution_repo=WorkflowExecutionRepository(db_session),
        notification_repo=NotificationRepository(db_session),
        executor=build_workflow_executor(db_session, settings),
        calendar=SchedulerCalendar.from_name("UTC"),
        isolation=savepoint_scope(db_session),
    )
    result = ScanResult(started_at=NOW)

    await scanner.scan_due_date_approaching(NOW, result)

    assert result.items_failed >= 1
    executions = WorkflowExecutionRepository(db_session)
    assert await executions.exists_for_task_on_date(ids["workflow"], ids["cabinets"], TODAY)
    assert not await executions.exists_for_task_on_date(ids["workflow"], ids["backsplash"], TODAY)
