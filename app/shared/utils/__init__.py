"""Shared utilities: datetime and generators."""

from app.shared.utils.datetime import SchedulerCalendar, ensure_utc, utc_now
from app.shared.utils.generators import generate_cuid, generate_run_id

__all__ = [
    "generate_cuid",
    "generate_run_id",
    "utc_now",
    "ensure_utc",
    "SchedulerCalendar",
]
