"""Date manipulation utilities - recurrence arithmetic on calendar days"""

from datetime import date, datetime, timedelta
from typing import List

from dateutil.relativedelta import relativedelta

from payday_forecast.domain.exceptions import InvalidFrequencyError, InvalidRangeError
from payday_forecast.domain.models import Frequency

_STEPS = {
    Frequency.WEEKLY: relativedelta(days=7),
    Frequency.BIWEEKLY: relativedelta(days=14),
    # relativedelta clamps to the last day of a shorter month
    Frequency.MONTHLY: relativedelta(months=1),
}


def as_calendar_day(value: date) -> date:
    """Drop time-of-day so datetimes and dates compare by calendar day"""
    if isinstance(value, datetime):
        return value.date()
    return value


def advance(from_date: date, frequency: Frequency) -> date:
    """
    Next occurrence of a recurring date.

    Weekly and biweekly add 7 and 14 days. Monthly adds one calendar month,
    keeping the day-of-month and clamping to the end of shorter months
    (2024-01-31 -> 2024-02-29). Chained calls advance from the clamped date,
    so the following step lands on 2024-03-29.
    """
    frequency = Frequency.parse(frequency)
    if frequency not in _STEPS:
        raise InvalidFrequencyError(f"Cannot advance a '{frequency.value}' date")
    return as_calendar_day(from_date) + _STEPS[frequency]


def advance_until(from_date: date, frequency: Frequency, not_before: date) -> date:
    """First occurrence on or after not_before, starting from from_date"""
    current = as_calendar_day(from_date)
    not_before = as_calendar_day(not_before)
    if current >= not_before:
        # validates frequency
        advance(current, frequency)
        return current
    while current < not_before:
        current = advance(current, frequency)
    return current


def occurrences_between(start: date, end: date, frequency: Frequency) -> List[date]:
    """Occurrences from start (inclusive) up to end (inclusive), recomputed per call"""
    start = as_calendar_day(start)
    end = as_calendar_day(end)
    if end < start:
        raise InvalidRangeError(f"Range end {end} precedes start {start}")

    occurrences = []
    current = start
    while current <= end:
        occurrences.append(current)
        current = advance(current, frequency)
    return occurrences


def generate_date_range(start: date, end: date) -> List[date]:
    """Generate list of dates from start to end (inclusive)"""
    days = (end - start).days + 1
    return [start + timedelta(days=i) for i in range(days)]
