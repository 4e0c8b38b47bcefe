"""Notification repository: the in-app notification sink."""

from __future__ import annotations

from datetime import date

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.dtos.notification import NotificationCreate, NotificationResult
from app.infrastructure.persistence.models.notification import Notification
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import ensure_utc

logger = get_logger(__name__)


def _to_result(n: Notification) -> NotificationResult:
    """Map Notification ORM to NotificationResult DTO."""
    return NotificationResult(
        id=n.id,
        user_id=n.user_id,
        type=n.type,
        title=n.title,
        message=n.message,
        notification_date=n.notification_date,
        project_id=n.project_id,
        task_id=n.task_id,
        workflow_id=n.workflow_id,
        workflow_execution_id=n.workflow_execution_id,
        priority=n.priority,
        metadata=dict(n.metadata_ or {}),
        read=bool(n.read),
        created_at=ensure_utc(n.created_at),
    )


def _to_model(data: NotificationCreate) -> Notification:
    return Notification(
        user_id=data.user_id,
        type=data.type,
        title=data.title,
        message=data.message,
        notification_date=data.notification_date,
        project_id=data.project_id,
        task_id=data.task_id,
        workflow_id=data.workflow_id,
        workflow_execution_id=data.workflow_execution_id,
        priority=data.priority,
        metadata_=data.metadata,
        read=False,
    )


class NotificationRepository:
    """Notification repository. Implements INotificationRepository."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert(self, data: NotificationCreate) -> NotificationResult:
        notification = _to_model(data)
        self.db.add(notification)
        await self.db.flush()
        await self.db.refresh(notification)
        return _to_result(notification)

    async def insert_if_absent(
        self, data: NotificationCreate
    ) -> NotificationResult | None:
        """Insert inside a savepoint; a same-day duplicate (unique index) returns None."""
        notification = _to_model(data)
        try:
            async with self.db.begin_nested():
                self.db.add(notification)
                await self.db.flush()
        except IntegrityError:
            logger.info(
                "%s notification for task %s on %s already exists",
                data.type,
                data.task_id,
                data.notification_date,
            )
            return None
        await self.db.refresh(notification)
        return _to_result(notification)

    async def exists_for_task_on_date(
        self, task_id: str, notification_type: str, day: date
    ) -> bool:
        result = await self.db.execute(
            select(Notification.id)
            .where(
                Notification.task_id == task_id,
                Notification.type == notification_type,
                Notification.notification_date == day,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None
