"""DTOs for in-app notifications (no dependency on ORM)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class NotificationCreate:
    """Command to insert a notification into the sink."""

    user_id: str
    type: str
    title: str
    message: str
    notification_date: date
    project_id: str | None = None
    task_id: str | None = None
    workflow_id: str | None = None
    workflow_execution_id: str | None = None
    priority: str = "medium"
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class NotificationResult:
    """Notification row as stored."""

    id: str
    user_id: str
    type: str
    title: str
    message: str
    notification_date: date
    project_id: str | None
    task_id: str | None
    workflow_id: str | None
    workflow_execution_id: str | None
    priority: str | None
    metadata: dict[str, Any]
    read: bool
    created_at: datetime | None = None
