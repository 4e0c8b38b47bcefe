"""Application lifespan: startup and shutdown.

Single place for all startup/shutdown logic (SRP). Used by main.py;
no business logic here, only wiring of infrastructure (logging, DB
engine dispose).
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence import database
from app.shared.telemetry.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit dispose the SQL engine."""
    settings = get_settings()

    # ---- Startup ----
    setup_logging()
    logger.info(
        "%s %s starting (scheduler timezone %s, window %d min, single-flight %s)",
        settings.app_name,
        settings.app_version,
        settings.scheduler_timezone,
        settings.scheduler_window_minutes,
        settings.scheduler_single_flight,
    )
    if not settings.scheduler_secret or not settings.scheduler_secret.get_secret_value():
        logger.warning(
            "SCHEDULER_SECRET is not set; scheduler endpoints accept unauthenticated calls"
        )

    yield

    # ---- Shutdown ----
    await database.dispose_engine()
