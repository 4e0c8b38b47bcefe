"""Application DTOs: plain dataclasses passed between use cases and repositories."""

from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.application.dtos.scheduler import ScanResult, TaskStatusChangedEvent
from app.application.dtos.task import OverdueTaskResult, TaskResult
from app.application.dtos.workflow import (
    WorkflowDefinitionResult,
    WorkflowExecutionCreate,
    WorkflowExecutionResult,
)

__all__ = [
    "NotificationCreate",
    "NotificationResult",
    "OverdueTaskResult",
    "ScanResult",
    "TaskResult",
    "TaskStatusChangedEvent",
    "WorkflowDefinitionResult",
    "WorkflowExecutionCreate",
    "WorkflowExecutionResult",
]
