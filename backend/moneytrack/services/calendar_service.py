"""Calendar arithmetic used by the recurring engine.

All datetimes are naive local wall-clock values, so adding days never shifts
the time of day.
"""

import calendar
import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from moneytrack.exceptions import InvalidMonthError

_MONTH_RE = re.compile(r"(\d{4})-(\d{2})")


@dataclass(frozen=True, order=True)
class MonthKey:
    """A calendar month, ordered by (year, month)."""

    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise InvalidMonthError(f"Month out of range: {self.month}")

    @classmethod
    def parse(cls, value: str) -> "MonthKey":
        """Parse a YYYY-MM string."""
        match = _MONTH_RE.fullmatch(value or "")
        if not match:
            raise InvalidMonthError(f"Invalid month: {value!r}, expected YYYY-MM")
        key = cls(int(match.group(1)), int(match.group(2)))
        if not FIRST_MONTH <= key <= LAST_MONTH:
            raise InvalidMonthError(f"Month out of supported range: {value}")
        return key

    @classmethod
    def of(cls, moment: datetime) -> "MonthKey":
        return cls(moment.year, moment.month)

    @property
    def start(self) -> datetime:
        return datetime(self.year, self.month, 1)

    def next(self) -> "MonthKey":
        if self.month == 12:
            return MonthKey(self.year + 1, 1)
        return MonthKey(self.year, self.month + 1)

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


# The month after LAST_MONTH must still have a datetime start.
FIRST_MONTH = MonthKey(1, 1)
LAST_MONTH = MonthKey(9999, 11)


class CalendarService:
    """Day, week and month boundaries plus date stepping.

    ``first_weekday`` follows ``datetime.weekday()`` numbering (0 = Monday,
    6 = Sunday) and decides where a calendar week starts.
    """

    def __init__(self, first_weekday: int = 6):
        if not 0 <= first_weekday <= 6:
            raise ValueError(f"first_weekday must be 0..6, got {first_weekday}")
        self.first_weekday = first_weekday

    def start_of_day(self, moment: datetime) -> datetime:
        return moment.replace(hour=0, minute=0, second=0, microsecond=0)

    def start_of_week(self, moment: datetime) -> datetime:
        offset = (moment.weekday() - self.first_weekday) % 7
        return self.start_of_day(moment) - timedelta(days=offset)

    def start_of_month(self, moment: datetime) -> datetime:
        return MonthKey.of(moment).start

    def days_in_month(self, year: int, month: int) -> int:
        return calendar.monthrange(year, month)[1]

    def add_days(self, moment: datetime, days: int) -> datetime:
        return moment + timedelta(days=days)

    def add_months(self, moment: datetime, months: int) -> datetime:
        """Shift by whole months, clamping the day to the target month's length."""
        index = moment.month - 1 + months
        year = moment.year + index // 12
        month = index % 12 + 1
        day = min(moment.day, self.days_in_month(year, month))
        return moment.replace(year=year, month=month, day=day)

    def in_month(self, anchor: datetime, month: MonthKey) -> datetime:
        """The anchor's day-of-month and time of day placed in ``month``, clamped to month end."""
        day = min(anchor.day, self.days_in_month(month.year, month.month))
        return anchor.replace(year=month.year, month=month.month, day=day)

    def day_bounds(self, moment: datetime) -> tuple[datetime, datetime]:
        start = self.start_of_day(moment)
        return start, self.add_days(start, 1)

    def week_bounds(self, moment: datetime) -> tuple[datetime, datetime]:
        start = self.start_of_week(moment)
        return start, self.add_days(start, 7)

    def month_bounds(self, moment: datetime) -> tuple[datetime, datetime]:
        month = MonthKey.of(moment)
        return month.start, month.next().start
