"""
Datetime utilities for consistent timezone handling.

All stored datetime values are timezone-aware UTC. Calendar-day decisions
(same-day dedup, "today", due-date thresholds) are made in an explicit
scheduler timezone through SchedulerCalendar, never via the host's local time.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of:
        - datetime.now() - naive, uses local timezone
        - datetime.utcnow() - naive, deprecated in Python 3.12

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """
    Ensure a datetime is UTC-aware.

    - If None, returns None
    - If naive, assumes UTC and attaches timezone
    - If aware, converts to UTC

    Use at repository/persistence boundaries to normalize datetimes.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        # Naive datetime - assume it's UTC and attach timezone
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


@dataclass(frozen=True)
class SchedulerCalendar:
    """Calendar arithmetic in the scheduler's configured timezone.

    The day boundary is midnight in `tz`. Two instants are on the "same day"
    when their local dates in `tz` are equal.
    """

    tz: ZoneInfo

    @classmethod
    def from_name(cls, name: str) -> "SchedulerCalendar":
        return cls(ZoneInfo(name))

    def local(self, dt: datetime) -> datetime:
        """Convert an instant to the scheduler timezone (naive input is UTC)."""
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=UTC)
        return dt.astimezone(self.tz)

    def today(self, now: datetime) -> date:
        return self.local(now).date()

    def same_day(self, a: datetime, b: datetime) -> bool:
        return self.today(a) == self.today(b)

    def start_of_day(self, day: date) -> datetime:
        """Midnight of `day` in the scheduler timezone, as an aware datetime."""
        return datetime.combine(day, time(0, 0), tzinfo=self.tz)

    def at(self, day: date, hour: int, minute: int) -> datetime:
        """Wall-clock time on `day` in the scheduler timezone."""
        return datetime.combine(day, time(hour, minute), tzinfo=self.tz)

    def days_since(self, day: date, now: datetime) -> int:
        """Whole days elapsed from the start of `day` until `now` (floored)."""
        elapsed = self.local(now) - self.start_of_day(day)
        return elapsed // timedelta(days=1)
