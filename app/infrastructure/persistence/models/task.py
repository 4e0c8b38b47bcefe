"""Task ORM model. Owned by the Kanban side of the application; read-only here."""

from datetime import date

from sqlalchemy import Date, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import TimestampedModel
from app.infrastructure.persistence.models.project import Profile, Project


class Task(TimestampedModel, Base):
    """Kanban task. Table: tasks."""

    __tablename__ = "tasks"

    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str | None] = mapped_column(
        String(32), nullable=True, default="todo", server_default="todo"
    )
    priority: Mapped[str | None] = mapped_column(
        String(16), nullable=True, default="medium", server_default="medium"
    )
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    assigned_to: Mapped[str | None] = mapped_column(
        String, ForeignKey("profiles.id", ondelete="SET NULL"), nullable=True, index=True
    )
    created_by: Mapped[str] = mapped_column(String, nullable=False)

    project: Mapped[Project] = relationship(lazy="raise")
    assignee: Mapped[Profile | None] = relationship(lazy="raise")

    __table_args__ = (
        Index("ix_tasks_project_due_date", "project_id", "due_date"),
        Index("ix_tasks_due_date_status", "due_date", "status"),
    )
