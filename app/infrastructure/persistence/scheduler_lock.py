"""PostgreSQL advisory lock that keeps scheduler ticks single-flight."""

from __future__ import annotations

import hashlib

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

SCHEDULER_LOCK_NAME = "renotimeline:workflow-scheduler"


def advisory_lock_key(name: str) -> int:
    """Stable 63-bit key for pg_try_advisory_xact_lock."""
    raw = hashlib.sha256(name.encode()).digest()[:8]
    return int.from_bytes(raw, "big") % (2**63)


class PostgresAdvisoryLock:
    """Transaction-scoped advisory lock. Implements ISchedulerLock.

    Held until the session's transaction ends, so the tick must run inside
    the same transaction. On non-PostgreSQL engines the lock always succeeds.
    """

    def __init__(self, db: AsyncSession, name: str = SCHEDULER_LOCK_NAME) -> None:
        self.db = db
        self._key = advisory_lock_key(name)

    async def try_acquire(self) -> bool:
        if self.db.get_bind().dialect.name != "postgresql":
            return True
        result = await self.db.execute(
            text("SELECT pg_try_advisory_xact_lock(:key)"), {"key": self._key}
        )
        acquired = bool(result.scalar())
        if not acquired:
            logger.info("Scheduler advisory lock %s is held by another tick", self._key)
        return acquired
