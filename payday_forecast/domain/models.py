"""Domain models - pure Python dataclasses representing budget entities"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Optional, Tuple

from payday_forecast.domain.exceptions import InvalidFrequencyError


class Frequency(str, Enum):
    """Recurrence cadence for pay cycles and bills"""

    WEEKLY = "weekly"
    BIWEEKLY = "biweekly"
    MONTHLY = "monthly"
    ONCE = "once"
    NONE = "none"

    @classmethod
    def parse(cls, value: str) -> "Frequency":
        """Map a raw value onto a Frequency, failing on anything unrecognised"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidFrequencyError(f"Unrecognised frequency: {value!r}") from None

    @property
    def is_recurring(self) -> bool:
        return self in (Frequency.WEEKLY, Frequency.BIWEEKLY, Frequency.MONTHLY)


class EventType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class Grade(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class ActionType(str, Enum):
    """State transitions accepted by the reducer"""

    ADD_BILL = "ADD_BILL"
    MARK_BILL_PAID = "MARK_BILL_PAID"
    CONFIRM_PAYDAY = "CONFIRM_PAYDAY"


@dataclass(frozen=True)
class PayCycle:
    """Scheduled income: amount deposited every cycle starting at next_pay_date"""

    frequency: Frequency
    amount: Decimal
    next_pay_date: date


@dataclass(frozen=True)
class Bill:
    """Scheduled expense, recurring or one-off"""

    id: str
    name: str
    amount: Decimal
    due_date: date
    recurring: bool = False
    frequency: Frequency = Frequency.ONCE
    paid: bool = False

    @property
    def is_once_off(self) -> bool:
        return not self.recurring

    def recurrence(self) -> Optional[Frequency]:
        """
        Cadence of a recurring bill, or None for a one-off.

        A recurring bill must carry weekly, biweekly or monthly; a one-off
        must carry once or none.
        """
        frequency = Frequency.parse(self.frequency)
        if self.recurring and not frequency.is_recurring:
            raise InvalidFrequencyError(
                f"Recurring bill '{self.id}' carries frequency '{frequency.value}'"
            )
        if not self.recurring and frequency.is_recurring:
            raise InvalidFrequencyError(
                f"One-off bill '{self.id}' carries recurring frequency '{frequency.value}'"
            )
        return frequency if self.recurring else None


@dataclass(frozen=True)
class BudgetSnapshot:
    """Point-in-time view of balance, pay cycle and bills"""

    balance: Decimal
    pay_cycle: PayCycle
    bills: Tuple[Bill, ...]
    as_of: date

    def find_bill(self, bill_id: str) -> Optional[Bill]:
        for bill in self.bills:
            if bill.id == bill_id:
                return bill
        return None


@dataclass(frozen=True)
class PaydayRecord:
    """Confirmed payday, appended to history exactly once"""

    date: date
    balance_after: Decimal
    bills_settled: FrozenSet[str] = field(default_factory=frozenset)


@dataclass(frozen=True)
class ForecastEvent:
    """Single balance movement applied on a forecast day"""

    type: EventType
    amount: Decimal
    source_id: str

    @property
    def delta(self) -> Decimal:
        return self.amount if self.type == EventType.INCOME else -self.amount


@dataclass(frozen=True)
class ForecastPoint:
    """Projected end-of-day balance with the events that produced it"""

    date: date
    projected_balance: Decimal
    events: Tuple[ForecastEvent, ...] = ()


@dataclass(frozen=True)
class HealthResult:
    """Output of budget health classification"""

    grade: Grade
    ratio: Decimal
    monthly_income: Decimal
    monthly_obligations: Decimal

    @property
    def ratio_defined(self) -> bool:
        return self.ratio.is_finite()


@dataclass(frozen=True)
class PeriodTotal:
    """History bucket: records confirmed within one fixed-length window"""

    period_start: date
    total_balance_delta: Decimal
    count: int


@dataclass(frozen=True)
class Action:
    """Reducer input; only the fields relevant to `type` are read"""

    type: ActionType
    bill: Optional[Bill] = None
    bill_id: Optional[str] = None
    pay_date: Optional[date] = None
    settle_bill_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ActionResult:
    """Next snapshot plus the payday record created, if any"""

    snapshot: BudgetSnapshot
    record: Optional[PaydayRecord] = None
