"""ORM models. Importing this package registers every table on Base.metadata."""

from app.infrastructure.persistence.models.notification import Notification
from app.infrastructure.persistence.models.project import Profile, Project
from app.infrastructure.persistence.models.task import Task
from app.infrastructure.persistence.models.workflow import (
    WorkflowDefinition,
    WorkflowExecution,
)

__all__ = [
    "Notification",
    "Profile",
    "Project",
    "Task",
    "WorkflowDefinition",
    "WorkflowExecution",
]
