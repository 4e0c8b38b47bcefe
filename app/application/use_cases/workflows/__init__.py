"""Workflow scheduler use cases (trigger scanning, execution, status-change hook)."""

from app.application.use_cases.workflows.execute_workflow import WorkflowExecutor
from app.application.use_cases.workflows.run_scheduler import RunWorkflowSchedulerUseCase
from app.application.use_cases.workflows.scan_triggers import TriggerScanner
from app.application.use_cases.workflows.task_status_changed import TaskStatusChangedTrigger

__all__ = [
    "RunWorkflowSchedulerUseCase",
    "TaskStatusChangedTrigger",
    "TriggerScanner",
    "WorkflowExecutor",
]
