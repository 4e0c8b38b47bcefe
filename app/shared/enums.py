"""Shared enumerations for the RenoTimeline scheduler.

Values mirror the database enums owned by the main application (tasks,
notifications, workflow definitions) so rows can be compared as plain strings.
"""

from enum import Enum


class _ValuesMixin:
    """Mixin that adds a values() classmethod to str Enums."""

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid values as strings."""
        return [member.value for member in cls]


class WorkflowTriggerType(_ValuesMixin, str, Enum):
    """Trigger types handled by the scheduler and the status-change hook."""

    DUE_DATE_APPROACHING = "due_date_approaching"
    SCHEDULED = "scheduled"
    TASK_STATUS_CHANGED = "task_status_changed"


class WorkflowExecutionStatus(_ValuesMixin, str, Enum):
    """Workflow execution lifecycle status.

    PENDING is written before actions run; the row is finalized to one of
    the other three once every action has resolved.
    """

    PENDING = "pending"
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class WorkflowActionType(_ValuesMixin, str, Enum):
    """Action kinds the executor can run."""

    SEND_NOTIFICATION = "send_notification"


class ScheduleType(_ValuesMixin, str, Enum):
    """Schedule grammar for `scheduled` workflows."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    CRON = "cron"


class NotificationType(_ValuesMixin, str, Enum):
    """In-app notification type."""

    DEADLINE = "deadline"
    OVERDUE = "overdue"
    COMPLETED = "completed"
    SYSTEM = "system"
    WORKFLOW_EXECUTED = "workflow_executed"
    WORKFLOW_FAILED = "workflow_failed"
    AUTOMATED_ACTION = "automated_action"


class NotificationPriority(_ValuesMixin, str, Enum):
    """Notification priority shown in the notification center."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TaskStatus(_ValuesMixin, str, Enum):
    """Kanban task status. DONE is the only terminal status."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    REVIEW = "review"
    DONE = "done"


class TaskPriority(_ValuesMixin, str, Enum):
    """Task priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


TERMINAL_TASK_STATUSES: frozenset[str] = frozenset({TaskStatus.DONE.value})
