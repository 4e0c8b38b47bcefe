"""Persistence repositories. Re-exports for dependency injection."""

from app.infrastructure.persistence.repositories.notification_repo import (
    NotificationRepository,
)
from app.infrastructure.persistence.repositories.task_repo import TaskRepository
from app.infrastructure.persistence.repositories.workflow_execution_repo import (
    WorkflowExecutionRepository,
)
from app.infrastructure.persistence.repositories.workflow_repo import (
    WorkflowDefinitionRepository,
)

__all__ = [
    "NotificationRepository",
    "TaskRepository",
    "WorkflowDefinitionRepository",
    "WorkflowExecutionRepository",
]
