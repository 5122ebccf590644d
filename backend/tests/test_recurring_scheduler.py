"""Tests for occurrence scheduling."""

from datetime import datetime, timedelta

from moneytrack.models.enums import RecurringInterval
from moneytrack.services.calendar_service import MonthKey
from moneytrack.services.recurring_scheduler import occurrence_dates, occurrence_in_month


class TestDailyOccurrences:
    """Daily occurrences step one calendar day from the anchor."""

    anchor = datetime(2025, 3, 10, 9, 0)

    def test_five_days(self, calendar):
        """Test five consecutive daily occurrences."""
        result = occurrence_dates(self.anchor, RecurringInterval.daily, datetime(2025, 3, 15, 9, 0), calendar)
        assert result == [datetime(2025, 3, d, 9, 0) for d in range(11, 16)]

    def test_less_than_a_day(self, calendar):
        """Test nothing is due before a full day has passed."""
        now = self.anchor + timedelta(hours=23)
        assert occurrence_dates(self.anchor, RecurringInterval.daily, now, calendar) == []

    def test_exactly_a_day(self, calendar):
        """Test the occurrence exactly one day later is due."""
        now = self.anchor + timedelta(hours=24)
        assert occurrence_dates(self.anchor, RecurringInterval.daily, now, calendar) == [now]

    def test_now_before_anchor(self, calendar):
        """Test nothing is due when now precedes the anchor."""
        assert occurrence_dates(self.anchor, RecurringInterval.daily, datetime(2025, 1, 1), calendar) == []


class TestWeeklyOccurrences:
    """Weekly occurrences step seven days from the anchor."""

    anchor = datetime(2025, 3, 1, 10, 0)

    def test_six_days(self, calendar):
        """Test nothing is due before a full week has passed."""
        now = self.anchor + timedelta(days=6)
        assert occurrence_dates(self.anchor, RecurringInterval.weekly, now, calendar) == []

    def test_seven_days(self, calendar):
        """Test the occurrence exactly one week later is due."""
        now = self.anchor + timedelta(days=7)
        assert occurrence_dates(self.anchor, RecurringInterval.weekly, now, calendar) == [now]

    def test_three_weeks(self, calendar):
        """Test three weekly occurrences seven days apart."""
        now = self.anchor + timedelta(days=21)
        result = occurrence_dates(self.anchor, RecurringInterval.weekly, now, calendar)
        assert result == [
            datetime(2025, 3, 8, 10, 0),
            datetime(2025, 3, 15, 10, 0),
            datetime(2025, 3, 22, 10, 0),
        ]


class TestMonthlyOccurrences:
    """Monthly occurrences keep the anchor's day of month, clamped to month end."""

    def test_same_month(self, calendar):
        """Test a template anchored this month yields nothing."""
        result = occurrence_dates(
            datetime(2025, 6, 6, 8, 0), RecurringInterval.monthly, datetime(2025, 6, 11, 8, 0), calendar
        )
        assert result == []

    def test_preserves_day_of_month(self, calendar):
        """Test instances keep the anchor day of month."""
        result = occurrence_dates(
            datetime(2025, 1, 15, 9, 0), RecurringInterval.monthly, datetime(2025, 2, 16), calendar
        )
        assert result == [datetime(2025, 2, 15, 9, 0)]

    def test_month_end_clamped_in_february(self, calendar):
        """Test Jan 31 clamps to Feb 28."""
        result = occurrence_dates(
            datetime(2025, 1, 31, 9, 0), RecurringInterval.monthly, datetime(2025, 2, 28, 12, 0), calendar
        )
        assert result == [datetime(2025, 2, 28, 9, 0)]

    def test_month_end_clamped_in_leap_february(self, calendar):
        """Test Jan 31 clamps to Feb 29 in a leap year."""
        result = occurrence_dates(
            datetime(2024, 1, 31, 9, 0), RecurringInterval.monthly, datetime(2024, 3, 31, 10, 0), calendar
        )
        assert result == [datetime(2024, 2, 29, 9, 0), datetime(2024, 3, 31, 9, 0)]

    def test_clamped_day_not_reached_yet(self, calendar):
        """Test a clamped occurrence later than now is not due."""
        result = occurrence_dates(
            datetime(2025, 1, 31, 9, 0), RecurringInterval.monthly, datetime(2025, 2, 1), calendar
        )
        assert result == []

    def test_year_rollover(self, calendar):
        """Test monthly occurrences continue into the next year."""
        result = occurrence_dates(
            datetime(2024, 11, 30, 8, 0), RecurringInterval.monthly, datetime(2025, 2, 28, 23, 0), calendar
        )
        assert result == [
            datetime(2024, 12, 30, 8, 0),
            datetime(2025, 1, 30, 8, 0),
            datetime(2025, 2, 28, 8, 0),
        ]

    def test_stops_at_first_future_occurrence(self, calendar):
        """Test occurrences after now are excluded."""
        result = occurrence_dates(
            datetime(2025, 1, 20, 9, 0), RecurringInterval.monthly, datetime(2025, 3, 10), calendar
        )
        assert result == [datetime(2025, 2, 20, 9, 0)]

    def test_repeatable(self, calendar):
        """Test the same inputs give the same occurrences."""
        args = (datetime(2025, 1, 20, 9, 0), RecurringInterval.monthly, datetime(2025, 8, 1), calendar)
        assert occurrence_dates(*args) == occurrence_dates(*args)


class TestUnknownInterval:

    def test_no_occurrences(self, calendar):
        """Test an unknown interval never schedules."""
        result = occurrence_dates(
            datetime(2020, 1, 1), RecurringInterval.unknown, datetime(2025, 1, 1), calendar
        )
        assert result == []


class TestOccurrenceInMonth:
    """Single occurrence for an explicit month."""

    anchor = datetime(2025, 1, 31, 9, 0)

    def test_clamped(self, calendar):
        """Test the month occurrence is clamped to month end."""
        assert occurrence_in_month(self.anchor, MonthKey(2025, 4), calendar) == datetime(2025, 4, 30, 9, 0)

    def test_anchor_month(self, calendar):
        """Test the anchor month has no occurrence."""
        assert occurrence_in_month(self.anchor, MonthKey(2025, 1), calendar) is None

    def test_month_before_anchor(self, calendar):
        """Test months before the anchor have no occurrence."""
        assert occurrence_in_month(self.anchor, MonthKey(2024, 12), calendar) is None
