"""Application services: action parsing and schedule evaluation."""

from app.application.services.schedule import ScheduleEvaluator, parse_schedule_time
from app.application.services.workflow_actions import (
    SendNotificationAction,
    WorkflowAction,
    parse_action,
    supported_action_types,
)

__all__ = [
    "ScheduleEvaluator",
    "SendNotificationAction",
    "WorkflowAction",
    "parse_action",
    "parse_schedule_time",
    "supported_action_types",
]
