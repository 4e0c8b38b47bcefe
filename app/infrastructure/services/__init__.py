"""Infrastructure implementations of application service interfaces."""

from app.infrastructure.services.workflow_scheduler import (
    build_scheduler_runner,
    build_status_changed_trigger,
    build_trigger_scanner,
    build_workflow_executor,
)
from app.infrastructure.services.workflow_template_renderer import (
    WorkflowTemplateRenderer,
)

__all__ = [
    "WorkflowTemplateRenderer",
    "build_scheduler_runner",
    "build_status_changed_trigger",
    "build_trigger_scanner",
    "build_workflow_executor",
]
