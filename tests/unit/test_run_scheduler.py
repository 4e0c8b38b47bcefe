"""RunWorkflowSchedulerUseCase unit tests."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

from app.application.dtos.scheduler import ScanResult
from app.application.use_cases.workflows import RunWorkflowSchedulerUseCase

NOW = datetime(2025, 6, 2, 9, 0, tzinfo=UTC)


async def test_runs_scanner_without_lock() -> None:
    scanner = AsyncMock()
    scanner.run.return_value = ScanResult(started_at=NOW)

    result = await RunWorkflowSchedulerUseCase(scanner).run(NOW)

    assert result.started_at == NOW
    scanner.run.assert_awaited_once_with(NOW)


async def test_runs_scanner_when_lock_acquired() -> None:
    scanner = AsyncMock()
    scanner.run.return_value = ScanResult(started_at=NOW)
    lock = AsyncMock()
    lock.try_acquire.return_value = True

    result = await RunWorkflowSchedulerUseCase(scanner, lock).run(NOW)

    assert result is not None
    lock.try_acquire.assert_awaited_once()
    scanner.run.assert_awaited_once()


async def test_skips_tick_when_lock_held() -> None:
    scanner = AsyncMock()
    lock = AsyncMock()
    lock.try_acquire.return_value = False

    result = await RunWorkflowSchedulerUseCase(scanner, lock).run(NOW)

    assert result is None
    scanner.run.assert_not_awaited()
