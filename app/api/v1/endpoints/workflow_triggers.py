"""Workflow trigger hooks called by the main application on task events."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_status_changed_trigger, verify_scheduler_secret
from app.application.dtos.scheduler import TaskStatusChangedEvent
from app.application.use_cases.workflows import TaskStatusChangedTrigger
from app.schemas.scheduler import (
    TaskStatusChangedRequest,
    TaskStatusChangedResponse,
    TriggeredExecution,
)
from app.shared.utils.datetime import utc_now

router = APIRouter()


@router.post(
    "/task-status-changed",
    response_model=TaskStatusChangedResponse,
    dependencies=[Depends(verify_scheduler_secret)],
)
async def task_status_changed(
    body: TaskStatusChangedRequest,
    trigger: Annotated[TaskStatusChangedTrigger, Depends(get_status_changed_trigger)],
) -> TaskStatusChangedResponse:
    """Run the project's task_status_changed workflows for one Kanban move."""
    executions = await trigger.process(
        TaskStatusChangedEvent(
            task_id=body.task_id,
            project_id=body.project_id,
            from_status=body.from_status.value,
            to_status=body.to_status.value,
            user_id=body.user_id,
            task_title=body.task_title,
            task_priority=body.task_priority.value if body.task_priority else None,
            assigned_to=body.assigned_to,
        ),
        utc_now(),
    )
    return TaskStatusChangedResponse(
        executions=[
            TriggeredExecution(id=e.id, workflow_id=e.workflow_id, status=e.status)
            for e in executions
        ],
        timestamp=utc_now(),
    )
