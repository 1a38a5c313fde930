"""
Quota window arithmetic.

A window is the half-open interval [window_start, reset_at). Weekly windows
last exactly 7x24h and are counted from a fixed anchor, local midnight of the
week-start day in the first week of 2001, so consecutive weeks always tile.
In zones with daylight saving the boundary sits one hour off local midnight
for the part of the year that is offset from the anchor.

Monthly windows run from midnight on the first of the month to midnight on
the first of the next month, so their length follows the calendar.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Optional, Tuple
from zoneinfo import ZoneInfo

from common.core.config import settings
from packages.metering.models.domain.enums import WindowKind

WEEK = timedelta(days=7)

# Monday
ANCHOR_MONDAY = date(2001, 1, 1)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QuotaCalendar:
    """Computes quota windows in the server's reference calendar."""

    def __init__(
        self,
        timezone_name: Optional[str] = None,
        week_start_day: Optional[int] = None,
    ):
        self.tz = ZoneInfo(timezone_name or settings.metering_timezone)
        if week_start_day is None:
            week_start_day = settings.metering_week_start_day
        if not 0 <= week_start_day <= 6:
            raise ValueError(
                f"week_start_day must be 0 (Monday) to 6 (Sunday), got {week_start_day}"
            )
        self.week_start_day = week_start_day
        self.week_anchor = self._local_midnight(
            ANCHOR_MONDAY + timedelta(days=week_start_day)
        )

    def _local_midnight(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self.tz).astimezone(
            timezone.utc
        )

    def window_for(self, kind: WindowKind, now: datetime) -> Tuple[datetime, datetime]:
        """
        Return (window_start, reset_at) in UTC for the window containing now.

        Naive datetimes are taken to be UTC.
        """
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        if kind == WindowKind.WEEKLY:
            start = self.week_anchor + ((now - self.week_anchor) // WEEK) * WEEK
            return start, start + WEEK

        if kind == WindowKind.MONTHLY:
            local_today = now.astimezone(self.tz).date()
            first = local_today.replace(day=1)
            if first.month == 12:
                next_first = first.replace(year=first.year + 1, month=1)
            else:
                next_first = first.replace(month=first.month + 1)
            return self._local_midnight(first), self._local_midnight(next_first)

        raise ValueError(f"Unsupported window kind: {kind}")
