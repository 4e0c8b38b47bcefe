"""Single-flight wrapper around one scheduler tick."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from app.shared.telemetry.logging import get_logger

if TYPE_CHECKING:
    from app.application.dtos.scheduler import ScanResult
    from app.application.interfaces.services import ISchedulerLock
    from app.application.use_cases.workflows.scan_triggers import TriggerScanner

logger = get_logger(__name__)


class RunWorkflowSchedulerUseCase:
    """Runs the trigger scanner unless another tick holds the scheduler lock."""

    def __init__(
        self,
        scanner: "TriggerScanner",
        lock: "ISchedulerLock | None" = None,
    ) -> None:
        self._scanner = scanner
        self._lock = lock

    async def run(self, now: datetime | None = None) -> "ScanResult | None":
        """Return the tick's counters, or None when another tick is already running."""
        if self._lock is not None and not await self._lock.try_acquire():
            logger.info("Scheduler tick skipped: another tick is already running")
            return None
        return await self._scanner.run(now)
