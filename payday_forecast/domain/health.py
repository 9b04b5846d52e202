"""Budget health scoring - letter grade from obligations vs income"""

from decimal import Decimal
from fractions import Fraction
from typing import List, Tuple, Union

from payday_forecast.domain.exceptions import DivisionUndefinedError, InvalidFrequencyError
from payday_forecast.domain.models import BudgetSnapshot, Frequency, Grade, HealthResult

DEFAULT_HORIZON_DAYS = 90

# Occurrences per year; monthly equivalent is amount * periods / 12
PERIODS_PER_YEAR = {
    Frequency.WEEKLY: 52,
    Frequency.BIWEEKLY: 26,
    Frequency.MONTHLY: 12,
}

# (inclusive upper bound, grade); anything above the last bound is F
GRADE_BANDS: List[Tuple[Fraction, Grade]] = [
    (Fraction(1, 2), Grade.A),
    (Fraction(7, 10), Grade.B),
    (Fraction(85, 100), Grade.C),
    (Fraction(1), Grade.D),
]


def _exact_monthly(amount: Decimal, frequency: Frequency) -> Fraction:
    frequency = Frequency.parse(frequency)
    if frequency not in PERIODS_PER_YEAR:
        raise InvalidFrequencyError(f"No monthly equivalent for '{frequency.value}'")
    return Fraction(amount) * PERIODS_PER_YEAR[frequency] / 12


def _exact_obligations(snapshot: BudgetSnapshot, horizon_days: int) -> Fraction:
    horizon_months = max(Fraction(1), Fraction(horizon_days, 30))
    total = Fraction(0)
    for bill in snapshot.bills:
        frequency = bill.recurrence()
        if bill.paid:
            continue
        if frequency is not None:
            total += _exact_monthly(bill.amount, frequency)
        else:
            total += Fraction(bill.amount) / horizon_months
    return total


def _to_decimal(value: Fraction) -> Decimal:
    return Decimal(value.numerator) / Decimal(value.denominator)


def monthly_equivalent(amount: Decimal, frequency: Frequency) -> Decimal:
    """Normalize a per-cycle amount to its monthly equivalent"""
    return _to_decimal(_exact_monthly(amount, frequency))


def monthly_obligations(snapshot: BudgetSnapshot, horizon_days: int = DEFAULT_HORIZON_DAYS) -> Decimal:
    """
    Sum unpaid bills as monthly equivalents.

    Recurring bills use the same normalization as income. One-off bills are
    spread over the forecast horizon in months, never less than one month.
    """
    return _to_decimal(_exact_obligations(snapshot, horizon_days))


def obligation_ratio(
    monthly_obligations: Union[Decimal, Fraction], monthly_income: Union[Decimal, Fraction]
) -> Fraction:
    """Exact obligations-to-income ratio"""
    if monthly_income == 0:
        raise DivisionUndefinedError("Monthly income is zero; obligation ratio is undefined")
    return Fraction(monthly_obligations) / Fraction(monthly_income)


def grade_for_ratio(ratio: Union[Decimal, Fraction]) -> Grade:
    """
    Map an obligation ratio to a letter grade (lower is healthier).

    Bands, upper bound inclusive:
    - <= 0.50: A
    - <= 0.70: B
    - <= 0.85: C
    - <= 1.00: D
    - above:   F (committed to more than is earned)
    """
    if isinstance(ratio, Decimal) and not ratio.is_finite():
        return Grade.F
    ratio = Fraction(ratio)
    for upper_bound, grade in GRADE_BANDS:
        if ratio <= upper_bound:
            return grade
    return Grade.F


def score(snapshot: BudgetSnapshot, horizon_days: int = DEFAULT_HORIZON_DAYS) -> HealthResult:
    """
    Main entry point: grade budget health for a snapshot.

    The grade is taken from the exact ratio; Decimal figures are for reporting.
    Zero income yields grade F with an infinite ratio rather than an error,
    so callers always get a renderable result.
    """
    pay_cycle = snapshot.pay_cycle
    income = _exact_monthly(pay_cycle.amount, pay_cycle.frequency)
    obligations = _exact_obligations(snapshot, horizon_days)

    try:
        ratio = obligation_ratio(obligations, income)
    except DivisionUndefinedError:
        return HealthResult(
            grade=Grade.F,
            ratio=Decimal("Infinity"),
            monthly_income=_to_decimal(income),
            monthly_obligations=_to_decimal(obligations),
        )

    return HealthResult(
        grade=grade_for_ratio(ratio),
        ratio=_to_decimal(ratio),
        monthly_income=_to_decimal(income),
        monthly_obligations=_to_decimal(obligations),
    )
