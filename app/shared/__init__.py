"""Shared utilities: enums, telemetry, and cross-cutting helpers.

Used by domain, application, and infrastructure. No business logic.
"""

from app.shared.enums import (
    NotificationType,
    ScheduleType,
    TaskStatus,
    WorkflowExecutionStatus,
    WorkflowTriggerType,
)
from app.shared.utils import (
    SchedulerCalendar,
    ensure_utc,
    generate_cuid,
    utc_now,
)

__all__ = [
    "NotificationType",
    "ScheduleType",
    "TaskStatus",
    "WorkflowExecutionStatus",
    "WorkflowTriggerType",
    "SchedulerCalendar",
    "generate_cuid",
    "utc_now",
    "ensure_utc",
]
