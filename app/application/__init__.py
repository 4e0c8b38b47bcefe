"""Application layer: interfaces, services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, lock, renderer).
"""

from app.application.interfaces import (
    INotificationRepository,
    ISchedulerLock,
    ITaskRepository,
    ITemplateRenderer,
    IWorkflowDefinitionRepository,
    IWorkflowExecutionRepository,
)
from app.application.use_cases import (
    RunWorkflowSchedulerUseCase,
    TaskStatusChangedTrigger,
    TriggerScanner,
    WorkflowExecutor,
)

__all__ = [
    "INotificationRepository",
    "ISchedulerLock",
    "ITaskRepository",
    "ITemplateRenderer",
    "IWorkflowDefinitionRepository",
    "IWorkflowExecutionRepository",
    "RunWorkflowSchedulerUseCase",
    "TaskStatusChangedTrigger",
    "TriggerScanner",
    "WorkflowExecutor",
]
