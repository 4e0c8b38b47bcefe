"""API tests for POST /api/v1/scheduler/run."""

from contextlib import nullcontext
from datetime import UTC, datetime

import pytest
from httpx import AsyncClient

from app.api.v1.dependencies import get_app_settings, get_scheduler_runner
from app.application.dtos.scheduler import ScanResult
from app.core.config import Settings
from app.infrastructure.persistence.database import get_db
from app.main import app

URL = "/api/v1/scheduler/run"
STARTED = datetime(2025, 6, 2, 9, 0, tzinfo=UTC)


class FakeSession:
    """Stands in for AsyncSession; the tick endpoint only opens a transaction."""

    def __init__(self) -> None:
        self.begun = 0

    def begin(self):
        self.begun += 1
        return nullcontext()


class StubRunner:
    def __init__(self, result: ScanResult | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls = 0

    async def run(self, now=None):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def session() -> FakeSession:
    fake = FakeSession()
    app.dependency_overrides[get_db] = lambda: fake
    return fake


def _use_runner(runner: StubRunner) -> None:
    app.dependency_overrides[get_scheduler_runner] = lambda: runner


def _require_secret(secret: str = "s3cret") -> None:
    settings = Settings(
        database_url="postgresql+asyncpg://u:p@localhost/db", scheduler_secret=secret
    )
    app.dependency_overrides[get_app_settings] = lambda: settings


async def test_tick_returns_summary(client: AsyncClient, session: FakeSession) -> None:
    result = ScanResult(
        started_at=STARTED,
        workflows_evaluated=3,
        workflows_triggered=2,
        notifications_created=1,
        execution_ids=["exec-1", "exec-2"],
    )
    runner = StubRunner(result)
    _use_runner(runner)

    response = await client.post(URL)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["message"] == "Workflow scheduler completed"
    assert "error" not in data
    assert data["summary"]["workflows_evaluated"] == 3
    assert data["summary"]["workflows_triggered"] == 2
    assert data["summary"]["notifications_created"] == 1
    assert data["summary"]["execution_ids"] == ["exec-1", "exec-2"]
    assert "timestamp" in data
    assert runner.calls == 1
    assert session.begun == 1


async def test_tick_failure_returns_500(client: AsyncClient, session: FakeSession) -> None:
    _use_runner(StubRunner(error=ConnectionError("database unreachable")))

    response = await client.post(URL)

    assert response.status_code == 500
    data = response.json()
    assert data["success"] is False
    assert data["error"] == "database unreachable"
    assert "timestamp" in data


async def test_tick_skipped_when_already_running(client: AsyncClient, session: FakeSession) -> None:
    _use_runner(StubRunner(result=None))

    response = await client.post(URL)

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert "already running" in data["message"]
    assert "summary" not in data


async def test_secret_required_when_configured(client: AsyncClient, session: FakeSession) -> None:
    runner = StubRunner(ScanResult(started_at=STARTED))
    _use_runner(runner)
    _require_secret()

    missing = await client.post(URL)
    wrong = await client.post(URL, headers={"X-Scheduler-Secret": "nope"})

    assert missing.status_code == 401
    assert missing.json()["error"] == "AUTHENTICATION_ERROR"
    assert wrong.status_code == 401
    assert runner.calls == 0


async def test_secret_accepted(client: AsyncClient, session: FakeSession) -> None:
    runner = StubRunner(ScanResult(started_at=STARTED))
    _use_runner(runner)
    _require_secret()

    response = await client.post(URL, headers={"X-Scheduler-Secret": "s3cret"})

    assert response.status_code == 200
    assert runner.calls == 1


async def test_get_not_allowed(client: AsyncClient) -> None:
    response = await client.get(URL)
    assert response.status_code == 405
