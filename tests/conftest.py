"""Pytest fixtures for testing"""

import pytest
from datetime import date
from decimal import Decimal
from fastapi.testclient import TestClient
from payday_forecast.api.main import create_app
from payday_forecast.domain.models import Bill, BudgetSnapshot, Frequency, PayCycle, PaydayRecord


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def as_of() -> date:
    return date(2024, 1, 10)


@pytest.fixture
def sample_snapshot(as_of: date) -> BudgetSnapshot:
    """Biweekly earner with rent, a weekly grocery budget and one-off bills"""
    return BudgetSnapshot(
        balance=Decimal("1500.00"),
        pay_cycle=PayCycle(
            frequency=Frequency.BIWEEKLY,
            amount=Decimal("2000.00"),
            next_pay_date=date(2024, 1, 12),
        ),
        bills=(
            Bill(
                id="rent",
                name="Rent",
                amount=Decimal("1200.00"),
                due_date=date(2024, 2, 1),
                recurring=True,
                frequency=Frequency.MONTHLY,
            ),
            Bill(
                id="groceries",
                name="Groceries",
                amount=Decimal("150.00"),
                due_date=date(2024, 1, 1),  # stale, catches up to 2024-01-15
                recurring=True,
                frequency=Frequency.WEEKLY,
            ),
            Bill(
                id="car-repair",
                name="Car repair",
                amount=Decimal("400.00"),
                due_date=date(2024, 1, 20),
            ),
            Bill(
                id="gift",
                name="Gift",
                amount=Decimal("75.00"),
                due_date=date(2024, 1, 18),
                paid=True,
            ),
        ),
        as_of=as_of,
    )


@pytest.fixture
def sample_records() -> list[PaydayRecord]:
    """Payday history on days 1, 3, 10 and 40 of 2024"""
    return [
        PaydayRecord(date=date(2024, 1, 1), balance_after=Decimal("1000"), bills_settled=frozenset({"rent"})),
        PaydayRecord(date=date(2024, 1, 3), balance_after=Decimal("1200")),
        PaydayRecord(date=date(2024, 1, 10), balance_after=Decimal("900")),
        PaydayRecord(date=date(2024, 2, 9), balance_after=Decimal("1500")),
    ]


def build_snapshot_payload(snapshot: BudgetSnapshot) -> dict:
    """JSON body for a snapshot, as the State layer would post it"""
    return {
        "balance": str(snapshot.balance),
        "pay_cycle": {
            "frequency": snapshot.pay_cycle.frequency.value,
            "amount": str(snapshot.pay_cycle.amount),
            "next_pay_date": snapshot.pay_cycle.next_pay_date.isoformat(),
        },
        "bills": [
            {
                "id": b.id,
                "name": b.name,
                "amount": str(b.amount),
                "due_date": b.due_date.isoformat(),
                "recurring": b.recurring,
                "frequency": b.frequency.value,
                "paid": b.paid,
            }
            for b in snapshot.bills
        ],
        "as_of": snapshot.as_of.isoformat(),
    }


def build_records_payload(records: list[PaydayRecord]) -> list[dict]:
    return [
        {
            "date": r.date.isoformat(),
            "balance_after": str(r.balance_after),
            "bills_settled": sorted(r.bills_settled),
        }
        for r in records
    ]


@pytest.fixture
def snapshot_payload(sample_snapshot: BudgetSnapshot) -> dict:
    return build_snapshot_payload(sample_snapshot)


@pytest.fixture
def records_payload(sample_records: list[PaydayRecord]) -> list[dict]:
    return build_records_payload(sample_records)
