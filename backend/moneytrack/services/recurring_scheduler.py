"""Occurrence scheduling for recurring templates."""

from datetime import datetime
from typing import Iterator, Optional

from moneytrack.models.enums import RecurringInterval
from moneytrack.services.calendar_service import CalendarService, MonthKey

_STEP_DAYS = {
    RecurringInterval.daily: 1,
    RecurringInterval.weekly: 7,
}


def occurrence_dates(
    anchor: datetime,
    interval: RecurringInterval,
    now: datetime,
    calendar: CalendarService,
) -> list[datetime]:
    """
    Occurrences strictly after ``anchor`` and no later than ``now``, in increasing order.
    The anchor itself is never returned; the template already stands for it.
    """
    if interval in _STEP_DAYS:
        return list(_stepped(anchor, _STEP_DAYS[interval], now, calendar))
    if interval == RecurringInterval.monthly:
        return list(_monthly(anchor, now, calendar))
    return []


def occurrence_in_month(
    anchor: datetime,
    month: MonthKey,
    calendar: CalendarService,
) -> Optional[datetime]:
    """The monthly occurrence that lands in ``month``, or None if the month is not after the anchor's."""
    if month <= MonthKey.of(anchor):
        return None
    return calendar.in_month(anchor, month)


def _stepped(anchor: datetime, step_days: int, now: datetime, calendar: CalendarService) -> Iterator[datetime]:
    n = 1
    occurrence = calendar.add_days(anchor, step_days)
    while occurrence <= now:
        yield occurrence
        n += 1
        occurrence = calendar.add_days(anchor, step_days * n)


def _monthly(anchor: datetime, now: datetime, calendar: CalendarService) -> Iterator[datetime]:
    # Months are compared as (year, month) pairs, not by elapsed days.
    month = MonthKey.of(anchor).next()
    last = MonthKey.of(now)
    while month <= last:
        occurrence = calendar.in_month(anchor, month)
        if occurrence > now:
            return
        yield occurrence
        month = month.next()
