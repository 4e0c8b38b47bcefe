"""Smoke tests for health and app wiring."""

from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from app.infrastructure.persistence.database import get_db
from app.main import app


class _Session:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error

    async def execute(self, statement):
        if self.error is not None:
            raise self.error
        return None


async def test_health_returns_ok(client: AsyncClient) -> None:
    """GET /api/v1/health returns 200 and status ok."""
    response = await client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "renotimeline-scheduler"}


async def test_health_echoes_request_id(client: AsyncClient) -> None:
    response = await client.get("/api/v1/health", headers={"X-Request-ID": "req-123"})
    assert response.headers.get("X-Request-ID") == "req-123"


async def test_root_returns_html(client: AsyncClient) -> None:
    """GET / returns HTML landing page."""
    response = await client.get("/")
    assert response.status_code == 200
    assert "text/html" in response.headers.get("content-type", "")
    assert "/api/v1/scheduler/run" in response.text


async def test_ready_when_database_answers(client: AsyncClient) -> None:
    app.dependency_overrides[get_db] = lambda: _Session()
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "ok"}


async def test_not_ready_when_database_unreachable(client: AsyncClient) -> None:
    error = OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))
    app.dependency_overrides[get_db] = lambda: _Session(error)
    response = await client.get("/api/v1/health/ready")
    assert response.status_code == 503
    assert response.json() == {
        "status": "not_ready",
        "database": "unreachable",
        "message": "database unreachable",
    }
