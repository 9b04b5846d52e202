"""Balance forecast engine - projects a day-by-day balance over a horizon"""

from collections import defaultdict
from datetime import date, timedelta
from typing import Dict, List, Optional

from payday_forecast.domain.exceptions import InvalidFrequencyError, InvalidRangeError
from payday_forecast.domain.models import (
    Bill,
    BudgetSnapshot,
    EventType,
    ForecastEvent,
    ForecastPoint,
    Frequency,
)
from payday_forecast.utils.date_utils import (
    advance_until,
    as_calendar_day,
    generate_date_range,
    occurrences_between,
)

DEFAULT_HORIZON_DAYS = 90
PAYDAY_SOURCE_ID = "payday"


def _payday_dates(snapshot: BudgetSnapshot, as_of: date, horizon_end: date) -> List[date]:
    pay_cycle = snapshot.pay_cycle
    frequency = Frequency.parse(pay_cycle.frequency)
    if not frequency.is_recurring:
        raise InvalidFrequencyError(f"Pay cycle cannot recur '{frequency.value}'")

    next_pay_date = as_calendar_day(pay_cycle.next_pay_date)
    if next_pay_date < as_of:
        raise InvalidRangeError(
            f"Next pay date {next_pay_date} precedes as_of {as_of}; snapshot was not normalized"
        )
    if next_pay_date > horizon_end:
        return []
    return occurrences_between(next_pay_date, horizon_end, frequency)


def _bill_dates(bill: Bill, as_of: date, horizon_end: date) -> List[date]:
    due_date = as_calendar_day(bill.due_date)
    frequency = bill.recurrence()

    if frequency is None:
        if bill.paid or due_date < as_of or due_date > horizon_end:
            return []
        return [due_date]

    # Stale recurring bills catch up to the present instead of firing in the past
    first = advance_until(due_date, frequency, as_of)
    if first > horizon_end:
        return []
    return occurrences_between(first, horizon_end, frequency)


def build_event_calendar(
    snapshot: BudgetSnapshot, as_of: date, horizon_end: date
) -> Dict[date, List[ForecastEvent]]:
    """
    Collect every income and expense event in [as_of, horizon_end].

    Each day's list holds income first, then expenses in snapshot bill order,
    which is the order they are applied in.
    """
    calendar: Dict[date, List[ForecastEvent]] = defaultdict(list)

    for pay_date in _payday_dates(snapshot, as_of, horizon_end):
        calendar[pay_date].append(
            ForecastEvent(
                type=EventType.INCOME,
                amount=snapshot.pay_cycle.amount,
                source_id=PAYDAY_SOURCE_ID,
            )
        )

    for bill in snapshot.bills:
        for due in _bill_dates(bill, as_of, horizon_end):
            calendar[due].append(
                ForecastEvent(type=EventType.EXPENSE, amount=bill.amount, source_id=bill.id)
            )

    return calendar


def project(
    snapshot: BudgetSnapshot,
    as_of: Optional[date] = None,
    horizon_days: int = DEFAULT_HORIZON_DAYS,
) -> List[ForecastPoint]:
    """
    Project the balance for every day in [as_of, as_of + horizon_days].

    Algorithm:
    - Start from snapshot.balance
    - Paydays advance from pay_cycle.next_pay_date, each adding pay_cycle.amount
    - Recurring bills fire on every occurrence in the horizon, after catching up
      past-due dates to as_of; one-off bills fire once unless paid or past due
    - Same-day income is applied before expenses, so ordering alone never
      produces a dip
    - Days without events repeat the running balance (dense output)

    Returns:
        Exactly horizon_days + 1 ForecastPoints in ascending date order
    """
    if horizon_days < 0:
        raise InvalidRangeError(f"Horizon must be non-negative, got {horizon_days}")

    as_of = as_calendar_day(as_of if as_of is not None else snapshot.as_of)
    horizon_end = as_of + timedelta(days=horizon_days)
    calendar = build_event_calendar(snapshot, as_of, horizon_end)

    balance = snapshot.balance
    points = []
    for day in generate_date_range(as_of, horizon_end):
        events = calendar.get(day, [])
        for event in events:
            balance += event.delta
        points.append(ForecastPoint(date=day, projected_balance=balance, events=tuple(events)))

    return points


def lowest_point(points: List[ForecastPoint]) -> ForecastPoint:
    """Earliest point carrying the minimum projected balance"""
    if not points:
        raise InvalidRangeError("Cannot find the lowest point of an empty forecast")
    return min(points, key=lambda p: p.projected_balance)
