"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for DB sessions, the scheduler shared-secret
check and the scheduler use cases. Use cases are built from infrastructure
implementations here; routes depend only on these dependencies.
"""

from __future__ import annotations

import hmac
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.application.use_cases.workflows import (
    RunWorkflowSchedulerUseCase,
    TaskStatusChangedTrigger,
)
from app.core.config import Settings, get_settings
from app.domain.exceptions import AuthenticationException
from app.infrastructure.persistence.database import get_db, get_db_transactional
from app.infrastructure.services.workflow_scheduler import (
    build_scheduler_runner,
    build_status_changed_trigger,
)


def get_app_settings() -> Settings:
    return get_settings()


async def verify_scheduler_secret(
    request: Request,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> None:
    """Require the shared secret header when SCHEDULER_SECRET is set (non-empty).

    Raises:
        AuthenticationException: header missing or not equal (constant-time compare).
    """
    expected = settings.scheduler_secret.get_secret_value() if settings.scheduler_secret else ""
    if not expected:
        return
    provided = request.headers.get(settings.scheduler_secret_header) or ""
    if not hmac.compare_digest(provided.encode(), expected.encode()):
        raise AuthenticationException("Invalid or missing scheduler secret")


async def get_scheduler_runner(
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> RunWorkflowSchedulerUseCase:
    """Scheduler tick use case. The route owns the transaction (see endpoints.scheduler)."""
    return build_scheduler_runner(db, settings)


async def get_status_changed_trigger(
    db: Annotated[AsyncSession, Depends(get_db_transactional)],
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TaskStatusChangedTrigger:
    """Status-change trigger in a request-scoped transaction."""
    return build_status_changed_trigger(db, settings)
