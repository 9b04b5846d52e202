"""Payday history aggregation - range filters and fixed-window totals"""

from datetime import date, timedelta
from decimal import Decimal
from typing import List, Sequence

from payday_forecast.domain.exceptions import EmptyHistoryError, InvalidRangeError
from payday_forecast.domain.models import PaydayRecord, PeriodTotal


def filter_by_range(records: Sequence[PaydayRecord], start: date, end: date) -> List[PaydayRecord]:
    """Records dated within [start, end], in their original order"""
    if end < start:
        raise InvalidRangeError(f"Range end {end} precedes start {start}")
    return [r for r in records if start <= r.date <= end]


def totals_by_period(records: Sequence[PaydayRecord], period_length_days: int) -> List[PeriodTotal]:
    """
    Bucket records into consecutive fixed-length windows.

    Requirements:
    - Windows start at the earliest record's date
    - A window with no records is omitted (sparse output)
    - A record's balance delta is its balance_after minus the previous
      record's; the first record in history contributes zero

    Example:
        Records on days 1, 3, 10, 40 with 30-day windows
        -> [window 0: count=3], [window 1: count=1]
    """
    if period_length_days <= 0:
        raise InvalidRangeError(f"Period length must be positive, got {period_length_days}")
    if not records:
        return []

    # Sort by date; stable for same-day records
    sorted_records = sorted(records, key=lambda r: r.date)
    origin = sorted_records[0].date

    totals: List[PeriodTotal] = []
    current_index = None
    delta = Decimal(0)
    count = 0
    previous_balance = None

    for record in sorted_records:
        index = (record.date - origin).days // period_length_days
        if index != current_index:
            if current_index is not None:
                totals.append(_period_total(origin, current_index, period_length_days, delta, count))
            current_index = index
            delta = Decimal(0)
            count = 0

        if previous_balance is not None:
            delta += record.balance_after - previous_balance
        previous_balance = record.balance_after
        count += 1

    totals.append(_period_total(origin, current_index, period_length_days, delta, count))
    return totals


def _period_total(origin: date, index: int, period_length_days: int, delta: Decimal, count: int) -> PeriodTotal:
    return PeriodTotal(
        period_start=origin + timedelta(days=index * period_length_days),
        total_balance_delta=delta,
        count=count,
    )


def latest_period(records: Sequence[PaydayRecord], period_length_days: int) -> PeriodTotal:
    """Most recent non-empty window; requires at least one record"""
    if not records:
        raise EmptyHistoryError("No payday history to summarize")
    return totals_by_period(records, period_length_days)[-1]


def latest_record(records: Sequence[PaydayRecord]) -> PaydayRecord:
    """Most recently dated payday record; requires at least one record"""
    if not records:
        raise EmptyHistoryError("No payday history recorded")
    return max(reversed(records), key=lambda r: r.date)
