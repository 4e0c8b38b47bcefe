"""Wiring: build the scheduler use cases on top of one AsyncSession."""

from __future__ import annotations

from functools import partial

from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.workflows import (
    RunWorkflowSchedulerUseCase,
    TaskStatusChangedTrigger,
    TriggerScanner,
    WorkflowExecutor,
)
from app.core.config import Settings
from app.infrastructure.persistence.repositories import (
    NotificationRepository,
    TaskRepository,
    WorkflowDefinitionRepository,
    WorkflowExecutionRepository,
)
from app.infrastructure.persistence.scheduler_lock import PostgresAdvisoryLock
from app.infrastructure.services.workflow_template_renderer import (
    WorkflowTemplateRenderer,
)
from app.shared.utils.datetime import SchedulerCalendar


def savepoint_scope(db: AsyncSession):
    """Isolation scope factory: each item runs in its own SAVEPOINT."""
    return partial(db.begin_nested)


def build_workflow_executor(db: AsyncSession, settings: Settings) -> WorkflowExecutor:
    return WorkflowExecutor(
        execution_repo=WorkflowExecutionRepository(db),
        notification_repo=NotificationRepository(db),
        calendar=SchedulerCalendar.from_name(settings.scheduler_timezone),
        template_renderer=WorkflowTemplateRenderer(),
        isolation=savepoint_scope(db),
    )


def build_trigger_scanner(db: AsyncSession, settings: Settings) -> TriggerScanner:
    return TriggerScanner(
        workflow_repo=WorkflowDefinitionRepository(db),
        task_repo=TaskRepository(db),
        execution_repo=WorkflowExecutionRepository(db),
        notification_repo=NotificationRepository(db),
        executor=build_workflow_executor(db, settings),
        calendar=SchedulerCalendar.from_name(settings.scheduler_timezone),
        window_minutes=settings.scheduler_window_minutes,
        default_days_before=settings.scheduler_default_days_before,
        isolation=savepoint_scope(db),
    )


def build_scheduler_runner(
    db: AsyncSession, settings: Settings
) -> RunWorkflowSchedulerUseCase:
    lock = PostgresAdvisoryLock(db) if settings.scheduler_single_flight else None
    return RunWorkflowSchedulerUseCase(build_trigger_scanner(db, settings), lock)


def build_status_changed_trigger(
    db: AsyncSession, settings: Settings
) -> TaskStatusChangedTrigger:
    return TaskStatusChangedTrigger(
        workflow_repo=WorkflowDefinitionRepository(db),
        executor=build_workflow_executor(db, settings),
        isolation=savepoint_scope(db),
    )
