"""Application interfaces (ports): repository and service protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure.
"""

from app.application.interfaces.repositories import (
    INotificationRepository,
    ITaskRepository,
    IWorkflowDefinitionRepository,
    IWorkflowExecutionRepository,
)
from app.application.interfaces.services import (
    ISchedulerLock,
    ITemplateRenderer,
    IsolationScope,
)

__all__ = [
    "INotificationRepository",
    "ISchedulerLock",
    "ITaskRepository",
    "ITemplateRenderer",
    "IWorkflowDefinitionRepository",
    "IWorkflowExecutionRepository",
    "IsolationScope",
]
