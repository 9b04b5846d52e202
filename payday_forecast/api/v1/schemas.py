"""Pydantic schemas for API request/response validation"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from payday_forecast.config import settings
from payday_forecast.domain.models import (
    ActionType,
    Bill,
    BudgetSnapshot,
    EventType,
    ForecastPoint,
    Frequency,
    Grade,
    HealthResult,
    PayCycle,
    PaydayRecord,
    PeriodTotal,
)


class PayCycleSchema(BaseModel):
    """Scheduled income"""

    frequency: Frequency
    amount: Decimal = Field(..., ge=0, description="Amount deposited each payday")
    next_pay_date: date

    def to_domain(self) -> PayCycle:
        return PayCycle(frequency=self.frequency, amount=self.amount, next_pay_date=self.next_pay_date)

    @classmethod
    def from_domain(cls, pay_cycle: PayCycle) -> "PayCycleSchema":
        return cls(
            frequency=pay_cycle.frequency,
            amount=pay_cycle.amount,
            next_pay_date=pay_cycle.next_pay_date,
        )


class BillSchema(BaseModel):
    """Scheduled expense"""

    id: str = Field(..., min_length=1, description="Unique bill identifier")
    name: str
    amount: Decimal = Field(..., gt=0)
    due_date: date
    recurring: bool = False
    frequency: Frequency = Frequency.ONCE
    paid: bool = False

    def to_domain(self) -> Bill:
        return Bill(
            id=self.id,
            name=self.name,
            amount=self.amount,
            due_date=self.due_date,
            recurring=self.recurring,
            frequency=self.frequency,
            paid=self.paid,
        )

    @classmethod
    def from_domain(cls, bill: Bill) -> "BillSchema":
        return cls(
            id=bill.id,
            name=bill.name,
            amount=bill.amount,
            due_date=bill.due_date,
            recurring=bill.recurring,
            frequency=bill.frequency,
            paid=bill.paid,
        )


class SnapshotSchema(BaseModel):
    """Current budget state supplied by the caller"""

    balance: Decimal
    pay_cycle: PayCycleSchema
    bills: List[BillSchema] = []
    as_of: date

    def to_domain(self) -> BudgetSnapshot:
        return BudgetSnapshot(
            balance=self.balance,
            pay_cycle=self.pay_cycle.to_domain(),
            bills=tuple(b.to_domain() for b in self.bills),
            as_of=self.as_of,
        )

    @classmethod
    def from_domain(cls, snapshot: BudgetSnapshot) -> "SnapshotSchema":
        return cls(
            balance=snapshot.balance,
            pay_cycle=PayCycleSchema.from_domain(snapshot.pay_cycle),
            bills=[BillSchema.from_domain(b) for b in snapshot.bills],
            as_of=snapshot.as_of,
        )


class PaydayRecordSchema(BaseModel):
    """Confirmed payday in history"""

    date: date
    balance_after: Decimal
    bills_settled: List[str] = []

    def to_domain(self) -> PaydayRecord:
        return PaydayRecord(
            date=self.date,
            balance_after=self.balance_after,
            bills_settled=frozenset(self.bills_settled),
        )

    @classmethod
    def from_domain(cls, record: PaydayRecord) -> "PaydayRecordSchema":
        return cls(
            date=record.date,
            balance_after=record.balance_after,
            bills_settled=sorted(record.bills_settled),
        )


# Forecast


class ForecastRequest(BaseModel):
    """Request body for POST /v1/forecast"""

    snapshot: SnapshotSchema
    as_of: Optional[date] = Field(None, description="Defaults to snapshot.as_of")
    horizon_days: int = Field(
        default_factory=lambda: settings.default_horizon_days,
        ge=0,
        le=settings.max_horizon_days,
    )


class ForecastEventSchema(BaseModel):
    type: EventType
    amount: Decimal
    source_id: str


class ForecastPointSchema(BaseModel):
    """Single day of a projection"""

    date: date
    projected_balance: Decimal
    events: List[ForecastEventSchema]

    @classmethod
    def from_domain(cls, point: ForecastPoint) -> "ForecastPointSchema":
        return cls(
            date=point.date,
            projected_balance=point.projected_balance,
            events=[
                ForecastEventSchema(type=e.type, amount=e.amount, source_id=e.source_id)
                for e in point.events
            ],
        )


class ForecastResponse(BaseModel):
    """Response for POST /v1/forecast"""

    as_of: date
    horizon_days: int
    points: List[ForecastPointSchema]
    lowest_point: ForecastPointSchema


# Health


class HealthScoreRequest(BaseModel):
    """Request body for POST /v1/health-score"""

    snapshot: SnapshotSchema
    horizon_days: int = Field(
        default_factory=lambda: settings.default_horizon_days,
        ge=0,
        le=settings.max_horizon_days,
    )


class HealthScoreResponse(BaseModel):
    """Response for POST /v1/health-score; ratio is null when income is zero"""

    grade: Grade
    ratio: Optional[Decimal] = None
    monthly_income: Decimal
    monthly_obligations: Decimal

    @classmethod
    def from_domain(cls, result: HealthResult) -> "HealthScoreResponse":
        return cls(
            grade=result.grade,
            ratio=result.ratio if result.ratio_defined else None,
            monthly_income=result.monthly_income,
            monthly_obligations=result.monthly_obligations,
        )


# History


class HistoryFilterRequest(BaseModel):
    """Request body for POST /v1/history/filter"""

    records: List[PaydayRecordSchema]
    start: date
    end: date


class HistoryFilterResponse(BaseModel):
    records: List[PaydayRecordSchema]


class HistoryTotalsRequest(BaseModel):
    """Request body for POST /v1/history/totals and /v1/history/latest"""

    records: List[PaydayRecordSchema]
    period_length_days: int = Field(default_factory=lambda: settings.default_period_length_days, gt=0)


class PeriodTotalSchema(BaseModel):
    period_start: date
    total_balance_delta: Decimal
    count: int

    @classmethod
    def from_domain(cls, total: PeriodTotal) -> "PeriodTotalSchema":
        return cls(
            period_start=total.period_start,
            total_balance_delta=total.total_balance_delta,
            count=total.count,
        )


class HistoryTotalsResponse(BaseModel):
    periods: List[PeriodTotalSchema]


# Actions


class ActionRequest(BaseModel):
    """Request body for POST /v1/actions"""

    snapshot: SnapshotSchema
    type: ActionType
    bill: Optional[BillSchema] = None
    bill_id: Optional[str] = None
    pay_date: Optional[date] = None
    settle_bill_ids: List[str] = []

    @model_validator(mode="after")
    def check_payload(self) -> "ActionRequest":
        if self.type == ActionType.ADD_BILL and self.bill is None:
            raise ValueError("ADD_BILL requires 'bill'")
        if self.type == ActionType.MARK_BILL_PAID and not self.bill_id:
            raise ValueError("MARK_BILL_PAID requires 'bill_id'")
        return self


class ActionResponse(BaseModel):
    """Response for POST /v1/actions"""

    snapshot: SnapshotSchema
    record: Optional[PaydayRecordSchema] = None
