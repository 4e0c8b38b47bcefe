"""Notification ORM model. Written by the scheduler; read and mutated by the notification center."""

from datetime import date
from typing import Any

import sqlalchemy as sa
from sqlalchemy import JSON, Boolean, Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TimestampedModel
from app.shared.enums import NotificationPriority, NotificationType


class Notification(TimestampedModel, Base):
    """In-app notification. Table: notifications.

    notification_date is the calendar day (scheduler timezone) the row was
    created for; the partial unique index allows one overdue alert per task per day.
    """

    __tablename__ = "notifications"

    user_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    project_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=True, index=True
    )
    task_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("tasks.id", ondelete="CASCADE"), nullable=True, index=True
    )
    workflow_id: Mapped[str | None] = mapped_column(String, nullable=True)
    workflow_execution_id: Mapped[str | None] = mapped_column(
        String,
        ForeignKey("workflow_executions.id", ondelete="SET NULL"),
        nullable=True,
    )
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    priority: Mapped[str | None] = mapped_column(
        String(16), nullable=True, default=NotificationPriority.MEDIUM.value
    )
    metadata_: Mapped[dict[str, Any] | None] = mapped_column(
        "metadata", JSON, nullable=True
    )
    read: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=sa.text("false")
    )
    notification_date: Mapped[date] = mapped_column(Date, nullable=False)

    __table_args__ = (
        Index(
            "uq_notifications_overdue_daily",
            "task_id",
            "type",
            "notification_date",
            unique=True,
            postgresql_where=sa.text(f"type = '{NotificationType.OVERDUE.value}'"),
        ),
        Index("ix_notifications_user_read", "user_id", "read"),
    )
