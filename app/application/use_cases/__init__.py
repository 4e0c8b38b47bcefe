"""Application use cases: one entry point per workflow."""

from app.application.use_cases.workflows import (
    RunWorkflowSchedulerUseCase,
    TaskStatusChangedTrigger,
    TriggerScanner,
    WorkflowExecutor,
)

__all__ = [
    "RunWorkflowSchedulerUseCase",
    "TaskStatusChangedTrigger",
    "TriggerScanner",
    "WorkflowExecutor",
]
