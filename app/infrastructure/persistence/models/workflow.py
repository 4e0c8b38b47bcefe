"""WorkflowDefinition and WorkflowExecution ORM models. Scheduled and event-driven automation."""

from datetime import date, datetime
from typing import Any

import sqlalchemy as sa
from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column

from app.infrastructure.persistence.database import Base
from app.infrastructure.persistence.models.mixins import CuidMixin, TimestampedModel
from app.shared.enums import WorkflowExecutionStatus, WorkflowTriggerType


def _in_values(column: str, values: list[str]) -> str:
    return "{} IN ({})".format(
        column, ", ".join("'{}'".format(v.replace("'", "''")) for v in values)
    )


class WorkflowDefinition(TimestampedModel, Base):
    """Workflow definition. Table: workflow_definitions. Trigger + ordered actions JSON."""

    __tablename__ = "workflow_definitions"

    project_id: Mapped[str] = mapped_column(
        String, ForeignKey("projects.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=sa.text("true")
    )
    trigger_type: Mapped[str] = mapped_column(String(64), nullable=False)
    trigger_config: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    conditions: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    actions: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    last_executed: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index(
            "ix_workflow_definitions_trigger_active",
            "trigger_type",
            "is_active",
        ),
    )


class WorkflowExecution(CuidMixin, Base):
    """Workflow execution audit. Table: workflow_executions.

    workflow_id is a soft reference: deleting a definition keeps its history.
    The partial unique index allows one due-date firing per (workflow, task, day).
    """

    __tablename__ = "workflow_executions"

    workflow_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    trigger_type: Mapped[str] = mapped_column(String(64), nullable=False)
    task_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    trigger_date: Mapped[date] = mapped_column(Date, nullable=False)
    trigger_data: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
    status: Mapped[str] = mapped_column(
        String(16),
        nullable=False,
        default=WorkflowExecutionStatus.PENDING.value,
        index=True,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    executed_actions: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, nullable=False, default=list
    )
    execution_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    completed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    __table_args__ = (
        Index(
            "uq_workflow_executions_due_date_daily",
            "workflow_id",
            "task_id",
            "trigger_date",
            unique=True,
            postgresql_where=sa.text(
                f"trigger_type = '{WorkflowTriggerType.DUE_DATE_APPROACHING.value}'"
            ),
        ),
        CheckConstraint(
            _in_values("status", WorkflowExecutionStatus.values()),
            name="workflow_executions_status_check",
        ),
    )
