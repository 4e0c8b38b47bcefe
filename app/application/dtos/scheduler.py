"""DTOs for scheduler ticks and trigger events."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any


@dataclass
class ScanResult:
    """Counters for one scheduler tick. Mutated by the scanner as it goes."""

    started_at: datetime
    workflows_evaluated: int = 0
    workflows_triggered: int = 0
    executions_failed: int = 0
    notifications_created: int = 0
    skipped_duplicates: int = 0
    items_failed: int = 0
    execution_ids: list[str] = field(default_factory=list)

    def to_summary(self) -> dict[str, Any]:
        data = asdict(self)
        data["started_at"] = self.started_at.isoformat()
        return data


@dataclass(frozen=True)
class TaskStatusChangedEvent:
    """A Kanban status change reported by the main application."""

    task_id: str
    project_id: str
    from_status: str
    to_status: str
    user_id: str
    task_title: str | None = None
    task_priority: str | None = None
    assigned_to: str | None = None
