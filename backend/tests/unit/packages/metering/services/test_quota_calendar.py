from datetime import datetime, timedelta, timezone

import pytest

from packages.metering.models.domain.enums import WindowKind
from packages.metering.services.quota_calendar import QuotaCalendar


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class TestWeeklyWindow:
    """Weekly windows start on the week-start day at midnight."""

    @pytest.fixture
    def calendar(self):
        return QuotaCalendar(timezone_name="UTC", week_start_day=0)

    def test_midweek(self, calendar):
        # Wednesday 2024-03-13
        start, reset_at = calendar.window_for(WindowKind.WEEKLY, utc(2024, 3, 13, 15, 30))

        assert start == utc(2024, 3, 11)
        assert reset_at == utc(2024, 3, 18)

    def test_exactly_at_window_start(self, calendar):
        """The start instant belongs to the new window."""
        start, reset_at = calendar.window_for(WindowKind.WEEKLY, utc(2024, 3, 18))

        assert start == utc(2024, 3, 18)
        assert reset_at == utc(2024, 3, 25)

    def test_last_second_of_window(self, calendar):
        start, reset_at = calendar.window_for(
            WindowKind.WEEKLY, utc(2024, 3, 17, 23, 59, 59)
        )

        assert start == utc(2024, 3, 11)
        assert reset_at == utc(2024, 3, 18)

    def test_window_is_seven_days(self, calendar):
        start, reset_at = calendar.window_for(WindowKind.WEEKLY, utc(2024, 12, 31, 8))

        assert reset_at - start == timedelta(days=7)
        assert start == utc(2024, 12, 30)

    def test_custom_week_start_day(self):
        """Sunday-start weeks."""
        calendar = QuotaCalendar(timezone_name="UTC", week_start_day=6)

        start, reset_at = calendar.window_for(WindowKind.WEEKLY, utc(2024, 3, 13, 15, 30))

        assert start == utc(2024, 3, 10)
        assert reset_at == utc(2024, 3, 17)

    def test_naive_now_is_utc(self, calendar):
        start, _ = calendar.window_for(WindowKind.WEEKLY, datetime(2024, 3, 13, 15, 30))

        assert start == utc(2024, 3, 11)

    def test_invalid_week_start_day(self):
        with pytest.raises(ValueError):
            QuotaCalendar(timezone_name="UTC", week_start_day=7)


class TestMonthlyWindow:
    """Monthly windows follow the calendar month."""

    @pytest.fixture
    def calendar(self):
        return QuotaCalendar(timezone_name="UTC", week_start_day=0)

    @pytest.mark.parametrize(
        "now, expected_start, expected_reset",
        [
            (utc(2024, 3, 13, 15, 30), utc(2024, 3, 1), utc(2024, 4, 1)),
            (utc(2024, 2, 29, 23, 59, 59), utc(2024, 2, 1), utc(2024, 3, 1)),
            (utc(2023, 2, 10), utc(2023, 2, 1), utc(2023, 3, 1)),
            (utc(2024, 12, 31, 12), utc(2024, 12, 1), utc(2025, 1, 1)),
            (utc(2024, 4, 1), utc(2024, 4, 1), utc(2024, 5, 1)),
        ],
    )
    def test_month_boundaries(self, calendar, now, expected_start, expected_reset):
        start, reset_at = calendar.window_for(WindowKind.MONTHLY, now)

        assert start == expected_start
        assert reset_at == expected_reset

    def test_month_lengths_vary(self, calendar):
        feb = calendar.window_for(WindowKind.MONTHLY, utc(2023, 2, 10))
        jan = calendar.window_for(WindowKind.MONTHLY, utc(2023, 1, 10))

        assert feb[1] - feb[0] == timedelta(days=28)
        assert jan[1] - jan[0] == timedelta(days=31)


class TestReferenceTimezone:
    """Windows are computed in the configured zone and returned in UTC."""

    def test_weekly_window_in_paris(self):
        calendar = QuotaCalendar(timezone_name="Europe/Paris", week_start_day=0)

        # Sunday 23:30 UTC is already Monday 00:30 in Paris (CET, UTC+1)
        start, reset_at = calendar.window_for(WindowKind.WEEKLY, utc(2024, 1, 14, 23, 30))

        assert start == utc(2024, 1, 14, 23)
        assert reset_at == utc(2024, 1, 21, 23)
        assert start.tzinfo == timezone.utc

    def test_monthly_window_in_paris(self):
        calendar = QuotaCalendar(timezone_name="Europe/Paris", week_start_day=0)

        start, reset_at = calendar.window_for(WindowKind.MONTHLY, utc(2024, 7, 15))

        # CEST is UTC+2
        assert start == utc(2024, 6, 30, 22)
        assert reset_at == utc(2024, 7, 31, 22)


class TestDaylightSavingWeeks:
    """Weekly windows keep tiling when the reference zone changes offset."""

    @pytest.fixture
    def calendar(self):
        return QuotaCalendar(timezone_name="Europe/Paris", week_start_day=0)

    def test_spring_forward_reset_matches_next_start(self, calendar):
        # 2024-03-31: Paris moves from UTC+1 to UTC+2
        _, announced_reset = calendar.window_for(WindowKind.WEEKLY, utc(2024, 3, 31, 21, 59))
        start, _ = calendar.window_for(WindowKind.WEEKLY, utc(2024, 3, 31, 22, 30))

        assert announced_reset == utc(2024, 3, 31, 23)
        assert start == utc(2024, 3, 24, 23)
        assert calendar.window_for(WindowKind.WEEKLY, announced_reset)[0] == announced_reset

    def test_fall_back_keeps_window_start(self, calendar):
        # 2024-10-27: Paris moves from UTC+2 back to UTC+1
        early = calendar.window_for(WindowKind.WEEKLY, utc(2024, 10, 27, 21, 30))
        late = calendar.window_for(WindowKind.WEEKLY, utc(2024, 10, 27, 22, 30))

        assert early == late
        assert late == (utc(2024, 10, 20, 23), utc(2024, 10, 27, 23))

        # Monday 00:00 CET opens the next window
        start, _ = calendar.window_for(WindowKind.WEEKLY, utc(2024, 10, 27, 23, 30))
        assert start == utc(2024, 10, 27, 23)

    @pytest.mark.parametrize(
        "first_hour",
        [utc(2024, 3, 20), utc(2024, 10, 16)],
    )
    def test_windows_tile_across_transition(self, calendar, first_hour):
        """Every instant falls in one 168h window whose reset opens the next."""
        for hour in range(24 * 21):
            now = first_hour + timedelta(hours=hour, minutes=30)
            start, reset_at = calendar.window_for(WindowKind.WEEKLY, now)

            assert start <= now < reset_at
            assert reset_at - start == timedelta(days=7)
            assert calendar.window_for(WindowKind.WEEKLY, reset_at)[0] == reset_at
            assert calendar.window_for(
                WindowKind.WEEKLY, reset_at - timedelta(microseconds=1)
            ) == (start, reset_at)
