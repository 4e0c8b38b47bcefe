"""Schedule evaluation for `scheduled` workflows.

Supported trigger_config grammar:

    {"schedule_type": "daily",   "schedule_time": "HH:MM"}
    {"schedule_type": "weekly",  "schedule_time": "HH:MM", "days_of_week": [1, 3]}
    {"schedule_type": "monthly", "schedule_time": "HH:MM", "day_of_month": 15}
    {"schedule_type": "cron",    "cron_expression": "0 9 * * 1-5"}

days_of_week uses 0 = Sunday .. 6 = Saturday. A workflow fires when now is
within the window either side of the scheduled time and it has not already
run in the current period (day, week starting Sunday, month, or cron
occurrence). Periods are calendar periods in the scheduler timezone.
Malformed config never fires.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from datetime import date, datetime, timedelta
from typing import Any

from croniter import croniter

from app.shared.enums import ScheduleType
from app.shared.telemetry.logging import get_logger
from app.shared.utils.datetime import SchedulerCalendar

logger = get_logger(__name__)

_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")


def parse_schedule_time(value: Any) -> tuple[int, int] | None:
    """Parse 'HH:MM' (24h). Returns None when missing or out of range."""
    if not isinstance(value, str):
        return None
    match = _HHMM_RE.match(value.strip())
    if not match:
        return None
    hours, minutes = int(match.group(1)), int(match.group(2))
    if hours > 23 or minutes > 59:
        return None
    return hours, minutes


def sunday_based_weekday(day: date) -> int:
    """0 = Sunday .. 6 = Saturday."""
    return (day.weekday() + 1) % 7


def _week_start(day: date) -> date:
    return day - timedelta(days=sunday_based_weekday(day))


def _int_list(value: Any) -> list[int] | None:
    if not isinstance(value, list) or not value:
        return None
    result: list[int] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, int):
            return None
        result.append(item)
    return result


class ScheduleEvaluator:
    """Decides whether a scheduled workflow is due at a given instant."""

    def __init__(self, calendar: SchedulerCalendar, window: timedelta) -> None:
        self._calendar = calendar
        self._window = window

    def should_fire(
        self,
        config: Mapping[str, Any] | None,
        last_executed: datetime | None,
        now: datetime,
        *,
        workflow_name: str = "",
    ) -> bool:
        config = config or {}
        schedule_type = config.get("schedule_type")
        if schedule_type == ScheduleType.CRON.value:
            return self._cron_due(config.get("cron_expression"), last_executed, now, workflow_name)
        if schedule_type not in (
            ScheduleType.DAILY.value,
            ScheduleType.WEEKLY.value,
            ScheduleType.MONTHLY.value,
        ):
            logger.warning(
                "Workflow %r has unsupported schedule_type %r; not firing",
                workflow_name,
                schedule_type,
            )
            return False

        hm = parse_schedule_time(config.get("schedule_time"))
        if hm is None:
            logger.warning(
                "Workflow %r has invalid schedule_time %r; not firing",
                workflow_name,
                config.get("schedule_time"),
            )
            return False

        local_now = self._calendar.local(now)
        today = local_now.date()

        if schedule_type == ScheduleType.WEEKLY.value:
            days = _int_list(config.get("days_of_week"))
            if days is None:
                logger.warning("Workflow %r: weekly schedule needs days_of_week", workflow_name)
                return False
            if sunday_based_weekday(today) not in days:
                return False
        elif schedule_type == ScheduleType.MONTHLY.value:
            day_of_month = config.get("day_of_month")
            if isinstance(day_of_month, bool) or not isinstance(day_of_month, int):
                logger.warning("Workflow %r: monthly schedule needs day_of_month", workflow_name)
                return False
            if today.day != day_of_month:
                return False

        scheduled = self._calendar.at(today, *hm)
        if abs(local_now - scheduled) > self._window:
            return False

        if last_executed is not None and self._same_period(
            schedule_type, self._calendar.local(last_executed).date(), today
        ):
            logger.debug("Workflow %r already executed this period", workflow_name)
            return False
        return True

    @staticmethod
    def _same_period(schedule_type: str, last: date, today: date) -> bool:
        if schedule_type == ScheduleType.WEEKLY.value:
            return _week_start(last) == _week_start(today)
        if schedule_type == ScheduleType.MONTHLY.value:
            return (last.year, last.month) == (today.year, today.month)
        return last == today

    def _cron_slot(self, expression: str, local_at: datetime) -> datetime | None:
        """The occurrence a run at local_at belongs to: the latest one inside the
        window, else the upcoming one inside the window."""
        # Cron fields are minute-granular; nudging forward makes an occurrence at exactly local_at count as previous.
        previous = croniter(expression, local_at + timedelta(seconds=1)).get_prev(datetime)
        if local_at - previous <= self._window:
            return previous
        upcoming = croniter(expression, local_at).get_next(datetime)
        if upcoming - local_at <= self._window:
            return upcoming
        return None

    def _cron_due(
        self,
        expression: Any,
        last_executed: datetime | None,
        now: datetime,
        workflow_name: str,
    ) -> bool:
        if not isinstance(expression, str) or not croniter.is_valid(expression):
            logger.warning(
                "Workflow %r has invalid cron_expression %r; not firing",
                workflow_name,
                expression,
            )
            return False
        occurrence = self._cron_slot(expression, self._calendar.local(now))
        if occurrence is None:
            return False
        if last_executed is not None and (
            self._cron_slot(expression, self._calendar.local(last_executed)) == occurrence
        ):
            logger.debug("Workflow %r already executed for %s", workflow_name, occurrence.isoformat())
            return False
        return True
