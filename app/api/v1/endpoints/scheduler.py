"""Scheduler tick endpoint: called by an external cron once per period."""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.v1.dependencies import get_scheduler_runner, verify_scheduler_secret
from app.application.use_cases.workflows import RunWorkflowSchedulerUseCase
from app.infrastructure.persistence.database import get_db
from app.schemas.scheduler import SchedulerRunResponse
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import utc_now

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/run",
    response_model=SchedulerRunResponse,
    response_model_exclude_none=True,
    responses={500: {"description": "Tick failed", "model": SchedulerRunResponse}},
    dependencies=[Depends(verify_scheduler_secret)],
)
async def run_scheduler(
    db: Annotated[AsyncSession, Depends(get_db)],
    runner: Annotated[RunWorkflowSchedulerUseCase, Depends(get_scheduler_runner)],
) -> SchedulerRunResponse | JSONResponse:
    """Run one scheduler tick in a single transaction.

    Per-item failures are counted in the summary; only a failure of the tick
    itself (e.g. the database is unreachable) returns 500 and rolls back.
    """
    try:
        async with db.begin():
            result = await runner.run(utc_now())
    except Exception as exc:
        logger.exception("Workflow scheduler tick failed")
        body = SchedulerRunResponse(
            success=False,
            error=str(exc) or type(exc).__name__,
            timestamp=utc_now(),
        )
        return JSONResponse(
            status_code=500, content=body.model_dump(mode="json", exclude_none=True)
        )
    if result is None:
        return SchedulerRunResponse(
            success=True,
            message="Workflow scheduler already running; tick skipped",
            timestamp=utc_now(),
        )
    return SchedulerRunResponse.from_summary(result.to_summary(), utc_now())
