"""Unit tests for recurrence date arithmetic"""

import pytest
from datetime import date, datetime
from payday_forecast.domain.models import Frequency
from payday_forecast.domain.exceptions import InvalidFrequencyError, InvalidRangeError
from payday_forecast.utils.date_utils import (
    advance,
    advance_until,
    as_calendar_day,
    generate_date_range,
    occurrences_between,
)


def test_advance_weekly_and_biweekly():
    """Test fixed-length cycles add 7 and 14 days"""
    assert advance(date(2024, 1, 1), Frequency.WEEKLY) == date(2024, 1, 8)
    assert advance(date(2024, 1, 1), Frequency.BIWEEKLY) == date(2024, 1, 15)
    assert advance(date(2024, 12, 28), Frequency.WEEKLY) == date(2025, 1, 4)


def test_advance_monthly_preserves_day():
    assert advance(date(2024, 1, 15), Frequency.MONTHLY) == date(2024, 2, 15)
    assert advance(date(2024, 12, 5), Frequency.MONTHLY) == date(2025, 1, 5)


def test_advance_monthly_clamps_to_month_end():
    """Test Jan 31 clamps to the last day of February"""
    assert advance(date(2024, 1, 31), Frequency.MONTHLY) == date(2024, 2, 29)  # Leap year
    assert advance(date(2023, 1, 31), Frequency.MONTHLY) == date(2023, 2, 28)
    assert advance(date(2024, 3, 31), Frequency.MONTHLY) == date(2024, 4, 30)


def test_advance_monthly_chains_from_clamped_date():
    """Test day-of-month is carried from the clamped date, not the original"""
    feb = advance(date(2024, 1, 31), Frequency.MONTHLY)
    mar = advance(feb, Frequency.MONTHLY)

    assert feb == date(2024, 2, 29)
    assert mar == date(2024, 3, 29)  # Not 2024-03-31


@pytest.mark.parametrize("frequency", [Frequency.ONCE, Frequency.NONE, "yearly"])
def test_advance_rejects_non_recurring_frequency(frequency):
    with pytest.raises(InvalidFrequencyError):
        advance(date(2024, 1, 1), frequency)


def test_advance_accepts_raw_frequency_value():
    assert advance(date(2024, 1, 1), "weekly") == date(2024, 1, 8)


def test_advance_ignores_time_of_day():
    assert advance(datetime(2024, 1, 1, 23, 59), Frequency.WEEKLY) == date(2024, 1, 8)
    assert as_calendar_day(datetime(2024, 1, 1, 6, 0)) == date(2024, 1, 1)


def test_occurrences_between_inclusive_bounds():
    """Test start and an exactly-hit end are both included"""
    occurrences = occurrences_between(date(2024, 1, 1), date(2024, 1, 29), Frequency.WEEKLY)

    assert occurrences == [
        date(2024, 1, 1),
        date(2024, 1, 8),
        date(2024, 1, 15),
        date(2024, 1, 22),
        date(2024, 1, 29),
    ]


def test_occurrences_between_monthly_clamp_sequence():
    occurrences = occurrences_between(date(2024, 1, 31), date(2024, 5, 1), Frequency.MONTHLY)

    assert occurrences == [
        date(2024, 1, 31),
        date(2024, 2, 29),
        date(2024, 3, 29),
        date(2024, 4, 29),
    ]


def test_occurrences_between_single_day_range():
    assert occurrences_between(date(2024, 1, 1), date(2024, 1, 1), Frequency.MONTHLY) == [date(2024, 1, 1)]


def test_occurrences_between_is_restartable():
    """Test repeated calls recompute the same sequence"""
    first = occurrences_between(date(2024, 1, 1), date(2024, 3, 1), Frequency.BIWEEKLY)
    second = occurrences_between(date(2024, 1, 1), date(2024, 3, 1), Frequency.BIWEEKLY)
    assert first == second


def test_occurrences_between_inverted_range():
    with pytest.raises(InvalidRangeError):
        occurrences_between(date(2024, 2, 1), date(2024, 1, 1), Frequency.WEEKLY)


def test_advance_until_catches_up_stale_date():
    """Test weekly date from 2024-01-01 catches up to the next multiple on/after 2024-01-10"""
    assert advance_until(date(2024, 1, 1), Frequency.WEEKLY, date(2024, 1, 10)) == date(2024, 1, 15)
    assert advance_until(date(2024, 1, 1), Frequency.WEEKLY, date(2024, 1, 8)) == date(2024, 1, 8)


def test_advance_until_leaves_current_date():
    assert advance_until(date(2024, 2, 1), Frequency.MONTHLY, date(2024, 1, 10)) == date(2024, 2, 1)


def test_advance_until_validates_frequency_even_when_current():
    with pytest.raises(InvalidFrequencyError):
        advance_until(date(2024, 2, 1), Frequency.ONCE, date(2024, 1, 10))


def test_generate_date_range_inclusive():
    days = generate_date_range(date(2024, 2, 27), date(2024, 3, 1))
    assert days == [date(2024, 2, 27), date(2024, 2, 28), date(2024, 2, 29), date(2024, 3, 1)]


def test_frequency_parse_hides_enum_lookup_error():
    with pytest.raises(InvalidFrequencyError) as exc_info:
        Frequency.parse("fortnightly")

    assert exc_info.value.__cause__ is None
    assert exc_info.value.__suppress_context__ is True
